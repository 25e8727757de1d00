from polycalc.cli import app

app(prog_name="polycalc")
