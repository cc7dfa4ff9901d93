"""Rule constants.

Identifiers, categories and message strings for the built-in rules. These are
read-only and not user-configurable; rule enablement and tracked targets live
in models.py.
"""

# =============================================================================
# Diagnostic IDs
# =============================================================================

COMMENT_CODE_ID = "CommentCode"
"""Comment contains disabled code."""

LOGGING_ID = "Logging"
"""Direct console output instead of a logger."""

# =============================================================================
# Categories
# =============================================================================

CATEGORY_COMMENTARY = "Commentary"
CATEGORY_LOGGING = "Logging"

# =============================================================================
# Messages
# =============================================================================

COMMENT_CODE_TITLE = "Comment contains code"
COMMENT_CODE_MESSAGE = "Comment contains code."
COMMENT_CODE_DESCRIPTION = (
    "Commented-out code rots quickly. Delete it and rely on version control instead."
)

LOGGING_TITLE = "Console output instead of logging"
LOGGING_MESSAGE_FORMAT = "Code contains {target} code."
LOGGING_DESCRIPTION = "Write diagnostics through a logging facility, not straight to the console."

REMOVE_COMMENT_FIX_TITLE = "Remove comment"

# =============================================================================
# Fix-all
# =============================================================================

MAX_FIX_ROUNDS = 5
"""Upper bound on fix/re-analyze rounds for one file."""
