import pytest

from rolebot.roles import ActionKind, dedupe_actions, parse_command


def _dedupe(text):
    return dedupe_actions(parse_command(text).actions)


def _summary(actions):
    return [(a.order_index, a.kind.value, a.role_name) for a in actions]


@pytest.mark.parametrize("text", ["+a -a", "-a +a", "+A -a"])
def test_opposite_pair_cancels(text):
    assert _dedupe(text) == []


def test_same_kind_keeps_first():
    assert _summary(_dedupe("+a +a +a")) == [(0, "+", "a")]
    assert _summary(_dedupe("-a -a")) == [(0, "-", "a")]


def test_third_action_after_cancel_survives():
    assert _summary(_dedupe("+a -a +a")) == [(2, "+", "a")]


def test_order_follows_message():
    result = _dedupe("+b +a -b +c +b")
    assert _summary(result) == [(1, "+", "a"), (3, "+", "c"), (4, "+", "b")]


@pytest.mark.parametrize(
    "text",
    ["+a -a +b", "+a +a -b -b +b", "-x +y -x +x +x", "+a -b +c -a +b"],
)
def test_dedupe_is_idempotent(text):
    once = _dedupe(text)
    assert dedupe_actions(once) == once
    assert dedupe_actions(reversed(once)) == once


def test_kinds_preserved():
    result = _dedupe("+a -b")
    assert [a.kind for a in result] == [ActionKind.ADD, ActionKind.REMOVE]
