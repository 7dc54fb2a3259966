"""Tests for rolling parse trees into resolved trees."""

import random

import pytest

from dicenotation import grammar
from dicenotation.compiler import compile_tree, roll_dice
from dicenotation.config import Limits
from dicenotation.errors import LimitExceeded
from dicenotation.tree import DiceTerm, Operator, ResolvedNode, ResolvedRoll


def compile_text(text, sampler=None, limits=None):
    named_list, _ = grammar.parse(text)
    return compile_tree(named_list.expressions[0], sampler, limits)


class TestRollDice:
    def test_faces_in_range(self) -> None:
        rng = random.Random(1234)
        for count, die in [(1, 1), (3, 6), (10, 20), (50, 100)]:
            faces = roll_dice(count, die, rng)
            assert len(faces) == count
            assert all(1 <= f <= die for f in faces)

    def test_zero_dice(self) -> None:
        assert roll_dice(0, 6) == []

    def test_default_sampler(self) -> None:
        for _ in range(20):
            assert 1 <= roll_dice(1, 6)[0] <= 6


class TestCompileTerms:
    def test_constant_is_single_face(self, scripted) -> None:
        sampler = scripted([])
        assert compile_text("5", sampler) == ResolvedRoll(values=(5,))
        assert sampler.calls == []

    def test_dice_use_sampler(self, scripted) -> None:
        sampler = scripted([3, 1, 6])
        assert compile_text("3d6", sampler) == ResolvedRoll(values=(3, 1, 6), die=6)
        assert sampler.calls == [(1, 6)] * 3

    def test_keep_highest_sorts_descending(self, scripted) -> None:
        roll = compile_text("4d6h3", scripted([2, 5, 1, 4]))
        assert roll == ResolvedRoll(values=(5, 4, 2, 1), keep=3, die=6)

    def test_keep_lowest_sorts_ascending(self, scripted) -> None:
        roll = compile_text("2d20l1", scripted([17, 4]))
        assert roll == ResolvedRoll(values=(4, 17), keep=1, die=20)

    def test_compile_bare_dice_term(self, scripted) -> None:
        assert compile_tree(DiceTerm(2, 4), scripted([4, 4])) == ResolvedRoll((4, 4), die=4)


class TestCompileTree:
    def test_single_term_collapses(self, scripted) -> None:
        assert isinstance(compile_text("1d20", scripted([7])), ResolvedRoll)

    def test_binary_shape_preserved(self, scripted) -> None:
        resolved = compile_text("1d20 + 5", scripted([12]))
        assert resolved == ResolvedNode(
            left=ResolvedRoll((12,), die=20),
            op=Operator.ADD,
            right=ResolvedRoll((5,)),
        )

    def test_left_rolled_before_right(self, scripted) -> None:
        resolved = compile_text("1d4 - 1d8", scripted([2, 7]))
        assert resolved.left.values == (2,)
        assert resolved.right.values == (7,)

    def test_group_marked(self, scripted) -> None:
        resolved = compile_text("(1d6 + 1) * 2", scripted([3]))
        assert resolved.op is Operator.MUL
        assert resolved.left.grouped
        assert resolved.left.left.op is Operator.ADD

    def test_multiplier_rolls_once(self, scripted) -> None:
        sampler = scripted([1, 2, 3])
        compile_text("5 * 3d6", sampler)
        assert len(sampler.calls) == 3

    def test_recompiling_rolls_again(self) -> None:
        named_list, _ = grammar.parse("20d20")
        rng = random.Random(99)
        first = compile_tree(named_list.expressions[0], rng)
        second = compile_tree(named_list.expressions[0], rng)
        assert first.values != second.values

    def test_unknown_node(self) -> None:
        with pytest.raises(TypeError):
            compile_tree("4d6")


class TestLimits:
    def test_too_many_dice(self) -> None:
        with pytest.raises(LimitExceeded):
            compile_text("11d6", limits=Limits(max_dice=10))

    def test_at_limit(self) -> None:
        roll = compile_text("10d6", random.Random(5), Limits(max_dice=10))
        assert len(roll.values) == 10

    def test_constants_not_limited(self) -> None:
        assert compile_text("500", limits=Limits(max_dice=10)) == ResolvedRoll((500,))

    def test_invalid_limits(self) -> None:
        with pytest.raises(ValueError):
            Limits(max_dice=0)
        with pytest.raises(ValueError):
            Limits(min_value=10, max_value=5)
