"""
Diagnostic channel for malformed input and failed lookups.

The fixed messages below are part of the public contract: tooling that
watches the log matches on them verbatim. The offending value (or the missing
label) is passed as the second argument, right after the message.

With ``diagnostics.on_invalid: raise`` the type-error and broken-table
paths raise instead of logging.
"""

from typing import Any

from decision_monads.errors import BrokenTableError, InvalidTableError
from decision_monads.logger import logger
from decision_monads.settings import settings


TYPE_ERROR_MESSAGE = (
    "Decision must be passed parameters that adhere to the documented type. "
    "Value that was passed:"
)
BOOL_TABLE_TYPE_ERROR_MESSAGE = (
    "BoolTable must be passed parameters that adhere to the documented type. "
    "Value that was passed:"
)
LOOKUP_MISS_MESSAGE = "`if` condition not found: "
BROKEN_TABLE_MESSAGE = "condition table is broken"


def raise_on_invalid() -> bool:
    """True when malformed input should raise rather than degrade."""
    return settings.get_nested("diagnostics.on_invalid", "degrade") == "raise"


def report_type_error(kind: str, value: Any, message: str = TYPE_ERROR_MESSAGE) -> None:
    """
    Report a wrapper built from input of the wrong shape.

    Truth and Decision share TYPE_ERROR_MESSAGE.

    Raises:
        InvalidTableError: Under the ``raise`` policy
    """
    if raise_on_invalid():
        raise InvalidTableError(kind, value)
    logger.error(message, value)


def report_broken_table(mode: Any, reason: str = "") -> None:
    """
    Report a decision run for which no strategy exists.

    Raises:
        BrokenTableError: Under the ``raise`` policy
    """
    if raise_on_invalid():
        raise BrokenTableError(mode, reason)
    logger.error(BROKEN_TABLE_MESSAGE, mode=mode, reason=reason)


def report_lookup_miss(label: Any) -> None:
    """Warn that a BoolTable has no row for ``label``."""
    logger.warning(LOOKUP_MISS_MESSAGE, label)
