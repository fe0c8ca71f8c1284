"""Tests for escape_regex."""

import re

import pytest

from grocery_bot.helpers import escape_regex


class TestSpecialCharacters:
    @pytest.mark.parametrize(
        "text, expected",
        [
            (".", "\\."),
            ("*", "\\*"),
            ("+", "\\+"),
            ("?", "\\?"),
            ("^", "\\^"),
            ("$", "\\$"),
            ("[]", "\\[\\]"),
            ("{}", "\\{\\}"),
            ("()", "\\(\\)"),
            ("|", "\\|"),
            ("/", "\\/"),
            ("\\", "\\\\"),
            ("-", "\\-"),
        ],
    )
    def test_escapes_special_character(self, text, expected):
        assert escape_regex(text) == expected


class TestCombinations:
    def test_multiple_special_characters(self):
        assert escape_regex(".*+") == "\\.\\*\\+"
        assert escape_regex("[0-9]+") == "\\[0\\-9\\]\\+"
        assert escape_regex("(foo|bar)") == "\\(foo\\|bar\\)"

    def test_mixed_regular_and_special_characters(self):
        assert escape_regex("hello.world") == "hello\\.world"
        assert escape_regex("user@example.com") == "user@example\\.com"
        assert escape_regex("price: $10.99") == "price: \\$10\\.99"


class TestEdgeCases:
    def test_empty_string(self):
        assert escape_regex("") == ""

    def test_no_special_characters(self):
        assert escape_regex("hello") == "hello"
        assert escape_regex("123") == "123"

    def test_whitespace_is_kept(self):
        assert escape_regex(" ") == " "
        assert escape_regex("\t") == "\t"
        assert escape_regex("\n") == "\n"

    def test_unicode_is_kept(self):
        assert escape_regex("😊") == "😊"
        assert escape_regex("→") == "→"
        assert escape_regex("Crème fraîche") == "Crème fraîche"

    def test_plain_text_is_unchanged_when_escaped_twice(self):
        assert escape_regex(escape_regex("apples")) == "apples"


class TestPracticalUsage:
    def test_matches_literal_text_only(self):
        pattern = re.compile(escape_regex("hello-world"))
        assert pattern.search("hello-world")
        assert not pattern.search("helloaworld")

    def test_email_like_pattern(self):
        pattern = re.compile(escape_regex("user.name@example.com"))
        assert pattern.search("user.name@example.com")
        assert not pattern.search("username@example.com")

    def test_file_path(self):
        pattern = re.compile(escape_regex("C:\\Program Files\\App"))
        assert pattern.search("C:\\Program Files\\App")
        assert not pattern.search("C:/Program Files/App")

    def test_item_name_with_brackets(self):
        pattern = re.compile(f"^{escape_regex('Milk (2%)')}$", re.IGNORECASE)
        assert pattern.search("milk (2%)")
        assert not pattern.search("Milk 2%")
