"""CLI for the polycalc calculation core.

Usage:
    polycalc eval "10+3^|9-2*(2+4)|" --trace     # Integer expression + stack trace
    polycalc poly -d a=3,2,2,1,1,0 -d b=1,1 "a*b" # Polynomial expression
    polycalc poly -d a=3,2,2,1,1,0 --at a=2 --derive a
    polycalc repl                                # Interactive session
    polycalc replay "(3+4)*2"                    # Animate the stack trace (manim)
    polycalc show -d a=1,2,-1,0 "a*a"            # Typeset polynomials (manim)
"""

from __future__ import annotations

import logging
from typing import List, NoReturn, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from polycalc.config import Settings
from polycalc.errors import CalcError
from polycalc.render import replay_trace, show_polynomials
from polycalc.session import PolynomialOutput, Session
from polycalc.trace import Trace

app = typer.Typer(
    name="polycalc",
    help="Integer expression and sparse polynomial calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console(highlight=False)

REPL_HELP = """\
  EXPR                 evaluate an integer expression
  :def NAME PAIRS      define a polynomial, e.g. :def a 3,2,2,1,1,0
  :poly EXPR           evaluate a polynomial expression, e.g. :poly a*(b-c)
  :at NAME X           evaluate a polynomial at X
  :diff NAME           differentiate a polynomial
  :show NAME           print a polynomial
  :list                list defined polynomials
  :clear               remove all polynomials
  :trace               print the stack trace of the last expression
  :quit                leave"""


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output")) -> None:
    """Integer expression and sparse polynomial calculator."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _fail(exc: CalcError) -> NoReturn:
    console.print(f"[red]{exc.kind}[/red]: {escape(str(exc))}", highlight=False)
    raise typer.Exit(1)


def _split_assignment(raw: str) -> Tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep:
        console.print(f"[red]Expected NAME=VALUE, got {escape(repr(raw))}[/red]")
        raise typer.Exit(2)
    return name.strip(), value.strip()


def _parse_int(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        console.print(f"[red]Not an integer: {escape(repr(raw))}[/red]")
        raise typer.Exit(2)


def trace_table(trace: Trace) -> Table:
    table = Table(title="Stack operations", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Stack")
    table.add_column("Action")
    table.add_column("Value", justify="right")
    for record in trace:
        value = record.symbol if record.symbol is not None else str(record.value)
        table.add_row(str(record.sequence), record.stack.value, record.action.value, value)
    return table


def _print_poly(label: str, output: PolynomialOutput, latex: bool) -> None:
    out.print(f"{label} = {output.text}", markup=False)
    if latex:
        out.print(f"  latex: {output.latex}", markup=False)


def _define_all(session: Session, definitions: List[str]) -> None:
    for raw in definitions:
        name, pairs = _split_assignment(raw)
        session.create_polynomial(name, pairs)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Integer expression, e.g. '(3+4)*2'"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Print the stack operations"),
) -> None:
    """Evaluate an integer expression."""
    session = Session(Settings.from_env())
    try:
        result = session.evaluate_expression(expression)
    except CalcError as exc:
        _fail(exc)
    out.print(str(result.value))
    if trace:
        out.print(trace_table(result.trace))


@app.command("poly")
def cmd_poly(
    expression: Optional[str] = typer.Argument(None, help="Polynomial expression, e.g. 'a*(b-c)'"),
    define: List[str] = typer.Option([], "--define", "-d", help="NAME=c1,e1,c2,e2,..."),
    at: List[str] = typer.Option([], "--at", help="NAME=X, evaluate NAME at X"),
    derive: List[str] = typer.Option([], "--derive", help="Differentiate NAME"),
    list_names: bool = typer.Option(False, "--list", "-l", help="List defined names"),
    latex: bool = typer.Option(False, "--latex", help="Also print LaTeX forms"),
) -> None:
    """Define polynomials and compute with them."""
    session = Session(Settings.from_env())
    try:
        _define_all(session, define)
        if list_names:
            out.print(", ".join(session.list_polynomial_names()), markup=False)
        if expression:
            _print_poly(expression, session.evaluate_polynomial_expression(expression), latex)
        for raw in at:
            name, x = _split_assignment(raw)
            out.print(f"{name}({x}) = {session.evaluate_polynomial_at(name, _parse_int(x))}", markup=False)
        for name in derive:
            _print_poly(f"{name}'", session.differentiate_polynomial(name), latex)
    except CalcError as exc:
        _fail(exc)


def run_line(session: Session, line: str) -> Optional[str]:
    """Execute one REPL line and return the text to print."""
    line = line.strip()
    if not line:
        return None
    if not line.startswith(":"):
        return str(session.evaluate_expression(line).value)

    command, _, rest = line.partition(" ")
    rest = rest.strip()
    if command == ":def":
        name, _, pairs = rest.partition(" ")
        return session.create_polynomial(name, pairs)
    if command == ":poly":
        return session.evaluate_polynomial_expression(rest).text
    if command == ":at":
        name, _, x = rest.partition(" ")
        try:
            value = int(x)
        except ValueError:
            return f"Not an integer: {x!r}"
        return str(session.evaluate_polynomial_at(name, value))
    if command == ":diff":
        return session.differentiate_polynomial(rest).text
    if command == ":show":
        return session.fetch_polynomial(rest).text
    if command == ":list":
        return ", ".join(session.list_polynomial_names())
    if command == ":clear":
        return session.clear_all_polynomials()
    if command == ":trace":
        return "\n".join(
            f"{r.sequence}: {r.action.value} {r.symbol if r.symbol is not None else r.value} ({r.stack.value})"
            for r in session.fetch_trace()
        )
    if command == ":help":
        return REPL_HELP
    return f"Unknown command {command!r}, try :help"


@app.command("repl")
def cmd_repl(
    capacity: Optional[int] = typer.Option(None, "--capacity", help="Advisory stack capacity"),
) -> None:
    """Interactive session keeping polynomials between lines."""
    session = Session(Settings.from_env())
    if capacity is not None:
        console.print(session.initialize(capacity))
    console.print("Enter expressions or :help, end with :quit or an empty line")
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not line.strip() or line.strip() == ":quit":
            break
        try:
            text = run_line(session, line)
        except CalcError as exc:
            console.print(f"[red]{exc.kind}[/red]: {escape(str(exc))}", highlight=False)
            continue
        if text:
            out.print(text, markup=False)


@app.command("replay")
def cmd_replay(
    expression: str = typer.Argument(help="Integer expression to animate"),
) -> None:
    """Animate the stack operations of an evaluation with manim."""
    settings = Settings.from_env()
    session = Session(settings)
    try:
        result = session.evaluate_expression(expression)
    except CalcError as exc:
        _fail(exc)
    console.print(f"{expression} = {result.value}, {len(result.trace)} steps", markup=False)
    raise typer.Exit(replay_trace(expression, result.trace, settings.render_quality))


@app.command("show")
def cmd_show(
    expression: Optional[str] = typer.Argument(None, help="Polynomial expression to typeset last"),
    define: List[str] = typer.Option([], "--define", "-d", help="NAME=c1,e1,c2,e2,..."),
) -> None:
    """Typeset polynomials (and an optional expression over them) with manim."""
    settings = Settings.from_env()
    session = Session(settings)
    try:
        _define_all(session, define)
        lines = [f"{name} = {session.fetch_polynomial(name).latex}" for name in session.list_polynomial_names()]
        if expression:
            lines.append(f"{expression} = {session.evaluate_polynomial_expression(expression).latex}")
    except CalcError as exc:
        _fail(exc)
    if not lines:
        console.print("[yellow]Nothing to show.[/yellow]")
        raise typer.Exit(1)
    raise typer.Exit(show_polynomials(lines, settings.render_quality))


if __name__ == "__main__":
    app()
