"""Tests for config/constants.py module.

Covers:
- Rule identifiers and categories
- Diagnostic message strings
"""

from __future__ import annotations

from sharpcheck.config.constants import (
    CATEGORY_COMMENTARY,
    CATEGORY_LOGGING,
    COMMENT_CODE_ID,
    COMMENT_CODE_MESSAGE,
    LOGGING_ID,
    LOGGING_MESSAGE_FORMAT,
    MAX_FIX_ROUNDS,
    REMOVE_COMMENT_FIX_TITLE,
)


class TestRuleIdentifiers:
    """Tests for rule IDs and categories."""

    def test_rule_ids(self) -> None:
        assert COMMENT_CODE_ID == "CommentCode"
        assert LOGGING_ID == "Logging"

    def test_categories(self) -> None:
        assert CATEGORY_COMMENTARY == "Commentary"
        assert CATEGORY_LOGGING == "Logging"


class TestMessages:
    """Tests for diagnostic messages."""

    def test_comment_code_message(self) -> None:
        assert COMMENT_CODE_MESSAGE == "Comment contains code."

    def test_logging_message_names_target(self) -> None:
        message = LOGGING_MESSAGE_FORMAT.format(target="System.Console.WriteLine")
        assert message == "Code contains System.Console.WriteLine code."

    def test_fix_title(self) -> None:
        assert REMOVE_COMMENT_FIX_TITLE == "Remove comment"


class TestFixRounds:
    """Tests for fix-all bounds."""

    def test_max_fix_rounds_is_positive(self) -> None:
        assert MAX_FIX_ROUNDS >= 1
