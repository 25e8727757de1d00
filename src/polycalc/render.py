"""Launch the manim scenes in ``scenes.py`` as a subprocess."""
from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import List, Sequence

from polycalc.trace import Trace

logger = logging.getLogger(__name__)

EXPR_ENV = "MANIM_EXPR"
TRACE_ENV = "MANIM_TRACE"
POLY_TEX_ENV = "MANIM_POLY_TEX"

SCENE_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "scenes.py")


def _run_scene(scene: str, env_updates: dict, quality: str) -> int:
    env = os.environ.copy()
    env.update(env_updates)
    cmd: List[str] = ["manim", quality, SCENE_FILE, scene]
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(cmd, check=False, env=env).returncode


def replay_trace(expr: str, trace: Trace, quality: str = "-pql") -> int:
    payload = json.dumps([record.to_dict() for record in trace])
    return _run_scene("TraceScene", {EXPR_ENV: expr, TRACE_ENV: payload}, quality)


def show_polynomials(tex_lines: Sequence[str], quality: str = "-pql") -> int:
    return _run_scene("PolynomialScene", {POLY_TEX_ENV: "\n".join(tex_lines)}, quality)
