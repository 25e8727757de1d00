"""Trace recording and replay."""

import pytest

from polycalc.evaluator import StackMachine, evaluate
from polycalc.tokens import tokenize
from polycalc.trace import Action, StackName, StackOperation, StackSnapshot, TraceRecorder, replay
from polycalc.errors import MalformedExpression


class SpyRecorder(TraceRecorder):
    """Captures the machine's real stacks each time a record is appended."""

    def __init__(self, machine):
        super().__init__()
        self.machine = machine
        self.states = []

    def _append(self, action, value, stack):
        super()._append(action, value, stack)
        self.states.append(StackSnapshot(tuple(self.machine.operands), tuple(self.machine.operators)))


def _ops(trace):
    return [(r.stack.value, r.action.value, r.symbol or r.value) for r in trace]


def test_trace_of_simple_precedence():
    trace = evaluate("3+4*2").trace
    assert _ops(trace) == [
        ("operand", "push", 3),
        ("operator", "push", "+"),
        ("operand", "push", 4),
        ("operator", "push", "*"),
        ("operand", "push", 2),
        ("operator", "pop", "*"),
        ("operand", "pop", 2),
        ("operand", "pop", 4),
        ("operand", "push", 8),
        ("operator", "pop", "+"),
        ("operand", "pop", 8),
        ("operand", "pop", 3),
        ("operand", "push", 11),
    ]


def test_sequence_numbers_are_consecutive():
    trace = evaluate("(3+4)*2").trace
    assert [r.sequence for r in trace] == list(range(len(trace)))


def test_paren_removal_is_logged():
    trace = evaluate("(3+4)*2").trace
    assert (StackName.OPERATOR, Action.POP, ord("(")) in [(r.stack, r.action, r.value) for r in trace]


def test_abs_logged_as_pop_then_push():
    trace = evaluate("|0-5|").trace
    assert _ops(trace)[-3:] == [
        ("operator", "pop", "|"),
        ("operand", "pop", -5),
        ("operand", "push", 5),
    ]


def test_negate_pops_one_operand():
    trace = evaluate("-(3)").trace
    assert _ops(trace) == [
        ("operator", "push", "~"),
        ("operator", "push", "("),
        ("operand", "push", 3),
        ("operator", "pop", "("),
        ("operator", "pop", "~"),
        ("operand", "pop", 3),
        ("operand", "push", -3),
    ]


def test_operator_values_are_code_points():
    record = evaluate("1+2").trace[1]
    assert record.value == ord("+")
    assert record.symbol == "+"


@pytest.mark.parametrize(
    "expr",
    ["3+4*2", "(3+4)*2", "10+3^|9-2*(2+4)|", "(((6+6)*6+3)*2+6)*2", "-(2+3)*|1-4|", "2^3^2-7/2", "10/-(3)", "-2^2+1"],
)
def test_replay_reproduces_every_step(expr):
    machine = StackMachine(tokenize(expr))
    spy = SpyRecorder(machine)
    machine.recorder = spy
    value = machine.run()

    snapshots = list(replay(spy.snapshot()))
    assert snapshots == spy.states
    assert snapshots[-1] == StackSnapshot((value,), ())


def test_replay_rejects_pop_from_empty_stack():
    bad = [StackOperation(0, Action.POP, 1, StackName.OPERAND)]
    with pytest.raises(MalformedExpression):
        list(replay(bad))


def test_record_dict_round_trip():
    record = StackOperation(4, Action.PUSH, ord("^"), StackName.OPERATOR)
    assert StackOperation.from_dict(record.to_dict()) == record
