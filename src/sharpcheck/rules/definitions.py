"""Rule definitions - register all built-in rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sharpcheck.config import constants
from sharpcheck.rules.models import Severity
from sharpcheck.rules.registry import Analyzer, Rule, registry

if TYPE_CHECKING:
    from sharpcheck.config.models import SharpCheckConfig


# Analyzers are imported lazily; they depend on rules.models themselves.
def _comment_code(config: SharpCheckConfig) -> Analyzer:
    from sharpcheck.analysis.comment_code import CommentCodeAnalyzer

    return CommentCodeAnalyzer(config.comment_code)


def _console_output(config: SharpCheckConfig) -> Analyzer:
    from sharpcheck.analysis.console_output import ConsoleOutputAnalyzer

    return ConsoleOutputAnalyzer(config.console_output)


registry.register(
    Rule(
        rule_id=constants.COMMENT_CODE_ID,
        title=constants.COMMENT_CODE_TITLE,
        message_format=constants.COMMENT_CODE_MESSAGE,
        category=constants.CATEGORY_COMMENTARY,
        description=constants.COMMENT_CODE_DESCRIPTION,
        config_section="comment_code",
        severity=Severity.WARNING,
        fix_title=constants.REMOVE_COMMENT_FIX_TITLE,
    ),
    factory=_comment_code,
)

registry.register(
    Rule(
        rule_id=constants.LOGGING_ID,
        title=constants.LOGGING_TITLE,
        message_format=constants.LOGGING_MESSAGE_FORMAT,
        category=constants.CATEGORY_LOGGING,
        description=constants.LOGGING_DESCRIPTION,
        config_section="console_output",
        severity=Severity.WARNING,
    ),
    factory=_console_output,
)
