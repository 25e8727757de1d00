"""Manim scenes for the trace replay and the typeset polynomials.

``manim`` runs this file by path; ``polycalc.render`` passes the input through
environment variables.
"""
from __future__ import annotations

import json
import os
from typing import List

from manim import (
    DOWN,
    LEFT,
    RIGHT,
    UP,
    FadeIn,
    FadeOut,
    MathTex,
    Mobject,
    Scene,
    Text,
    Transform,
    config,
)

from polycalc.render import EXPR_ENV, POLY_TEX_ENV, TRACE_ENV
from polycalc.tokens import NEGATE
from polycalc.trace import Action, StackName, StackOperation

CELL_SCALE = 0.5
COLUMN_SHIFT = 3.0


def _fit_to_frame(mob: Mobject) -> None:
    max_width = config.frame_width * 0.9
    max_height = config.frame_height * 0.8
    if mob.width > max_width:
        mob.scale(max_width / mob.width)
    if mob.height > max_height:
        mob.scale(max_height / mob.height)
    mob.move_to([0, 0, 0])


def _step_title(i: int) -> Text:
    title = Text(f"Step: {i}", font="Noto Sans", weight="BOLD")
    return title.scale(0.45).to_edge(UP, buff=0.1)


def _cell_label(record: StackOperation) -> str:
    if record.stack is StackName.OPERATOR:
        return "neg" if record.symbol == NEGATE else record.symbol or ""
    return str(record.value)


class TraceScene(Scene):
    """Replays a stack-operation trace: one column per stack, pushes fade a
    cell in on top, pops fade the top cell out."""

    def construct(self) -> None:
        expr = os.environ.get(EXPR_ENV, "")
        records = [StackOperation.from_dict(d) for d in json.loads(os.environ.get(TRACE_ENV, "[]"))]
        anim_run_time = 0.6

        title = _step_title(0)
        label = Text(expr, font="Noto Sans").scale(0.6).next_to(title, DOWN, buff=0.2)
        headers = {
            StackName.OPERAND: Text("operands", font="Noto Sans").scale(0.4).shift(LEFT * COLUMN_SHIFT + DOWN * 3.2),
            StackName.OPERATOR: Text("operators", font="Noto Sans").scale(0.4).shift(RIGHT * COLUMN_SHIFT + DOWN * 3.2),
        }
        self.play(FadeIn(title), FadeIn(label), *[FadeIn(h) for h in headers.values()], run_time=anim_run_time)

        columns: dict = {StackName.OPERAND: [], StackName.OPERATOR: []}
        for i, record in enumerate(records, start=1):
            column: List[Mobject] = columns[record.stack]
            if record.action is Action.PUSH:
                cell = Text(_cell_label(record), font="Noto Sans").scale(CELL_SCALE)
                anchor = column[-1] if column else headers[record.stack]
                cell.next_to(anchor, UP, buff=0.15)
                column.append(cell)
                change = FadeIn(cell, shift=DOWN * 0.3)
            else:
                change = FadeOut(column.pop(), shift=UP * 0.3)
            self.play(Transform(title, _step_title(i)), change, run_time=anim_run_time)

        self.wait(2.0)


class PolynomialScene(Scene):
    def construct(self) -> None:
        lines = [line for line in os.environ.get(POLY_TEX_ENV, "0").splitlines() if line.strip()]
        anim_run_time = 1.2

        title = _step_title(1)
        label = MathTex(lines[0])
        _fit_to_frame(label)
        self.play(FadeIn(title), FadeIn(label), run_time=anim_run_time)

        for i, line in enumerate(lines[1:], start=2):
            new_label = MathTex(line)
            _fit_to_frame(new_label)
            self.play(Transform(title, _step_title(i)), Transform(label, new_label), run_time=anim_run_time)

        self.wait(2.0)

