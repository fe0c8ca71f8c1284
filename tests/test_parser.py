"""Tests for command and prompt input parsing."""

import pytest

from grocery_bot.bot.parser import parse_command, parse_number, parse_price, parse_quantity, parse_unit


class TestParseCommand:
    def test_command(self):
        assert parse_command("/show_list") == ("show_list", [])

    def test_command_with_args_and_mention(self):
        assert parse_command("/Add_Item@GroceryBot milk 2") == ("add_item", ["milk", "2"])

    @pytest.mark.parametrize("text", ["", "hello", None])
    def test_not_a_command(self, text):
        assert parse_command(text) == (None, [])


class TestParseNumber:
    @pytest.mark.parametrize("text, expected", [("2", 2.0), (" 2.5 ", 2.5), ("2,5", 2.5), ("-1", -1.0)])
    def test_valid(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["abc", "", "nan", "inf", "1.2.3", "1_000", "1e3", "\u0661\u0662", "\uff12", "2.", ".5", None],
    )
    def test_invalid(self, text):
        assert parse_number(text) is None


class TestParseQuantity:
    def test_positive(self):
        assert parse_quantity("1.5") == 1.5

    def test_zero_means_not_specified(self):
        assert parse_quantity("0") == 0

    def test_zero_not_allowed(self):
        assert parse_quantity("0", allow_zero=False) is None

    def test_negative(self):
        assert parse_quantity("-1") is None


class TestParsePrice:
    def test_free(self):
        assert parse_price("0") == 0

    def test_price(self):
        assert parse_price("12.99") == 12.99

    def test_negative(self):
        assert parse_price("-3") is None


class TestParseUnit:
    @pytest.mark.parametrize("text, expected", [("kg", "kg"), (" G ", "g"), ("Pieces", "pieces")])
    def test_valid(self, text, expected):
        assert parse_unit(text) == expected

    @pytest.mark.parametrize("text", ["bottles", "", None])
    def test_invalid(self, text):
        assert parse_unit(text) is None
