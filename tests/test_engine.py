"""Tests for the handle_dice_string entry point."""

import random
import re

import pytest

from dicenotation import (
    DiceError, DivisionByZero, InvalidSyntax, LimitExceeded, Limits, RollResult,
    handle_dice_string,
)


class TestHandleDiceString:
    def test_bare_integer(self) -> None:
        [result] = handle_dice_string("5")
        assert result == RollResult(label="Roll 1", text="5 => 5", total=5, expression="5")

    def test_pairs(self) -> None:
        results = handle_dice_string("1, 2")
        assert [tuple(r) for r in results] == [("Roll 1", "1 => 1"), ("Roll 2", "2 => 2")]

    def test_labels_in_order(self) -> None:
        results = handle_dice_string("hit: 1d20 + 5, damage: 1d8 + 4")
        assert [r.label for r in results] == ["hit", "damage"]
        assert 6 <= results[0].total <= 25
        assert 5 <= results[1].total <= 12

    def test_generated_labels_use_position(self) -> None:
        results = handle_dice_string("1d4, fire: 2d6, 3")
        assert [r.label for r in results] == ["Roll 1", "fire", "Roll 3"]

    def test_keep_highest_text(self, scripted) -> None:
        [result] = handle_dice_string("4d6h3", sampler=scripted([3, 6, 2, 5]))
        assert result.text == "[**6**, 5, 3 | 2] => 14"
        assert result.total == 14

    def test_text_shows_total(self) -> None:
        for label, text in handle_dice_string("3d6, 2d20l1 + 1"):
            shown, total = text.rsplit(" => ", 1)
            assert re.fullmatch(r"-?\d+", total)

    def test_expression_is_echoed(self) -> None:
        [result] = handle_dice_string("2d6+3")
        assert result.expression == "2d6 + 3"

    def test_right_leaning_subtraction(self) -> None:
        [result] = handle_dice_string("10 - 3 - 2")
        assert result.text == "10 - 3 - 2 => 9"

    def test_seeded_sampler_is_repeatable(self) -> None:
        first = handle_dice_string("10d10h5", sampler=random.Random(7))
        second = handle_dice_string("10d10h5", sampler=random.Random(7))
        assert first == second


class TestFailures:
    @pytest.mark.parametrize("text", ["4d", "h3", "1d6, 4d", "hit: "])
    def test_invalid_syntax_fails_whole_request(self, text) -> None:
        with pytest.raises(InvalidSyntax):
            handle_dice_string(text)

    def test_division_by_zero_fails_whole_request(self) -> None:
        with pytest.raises(DivisionByZero):
            handle_dice_string("1d6, 1 / 0, 2d6")

    def test_long_chain_fails_whole_request(self) -> None:
        with pytest.raises(LimitExceeded):
            handle_dice_string(" + ".join(["1"] * 500))

    def test_deep_nesting_fails_whole_request(self) -> None:
        with pytest.raises(DiceError):
            handle_dice_string("(" * 300 + "1d6" + ")" * 300)

    def test_limits_passed_through(self) -> None:
        with pytest.raises(LimitExceeded):
            handle_dice_string("3d6", limits=Limits(max_dice=2))
