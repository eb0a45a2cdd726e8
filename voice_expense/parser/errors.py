# -*- coding: utf-8 -*-
"""
Validation Issue Types

Interpretation never raises for a transcript: a missing or invalid amount is
reported as a `ValidationIssue` attached to the result, so the confirmation
UI can still show a partial proposal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ValidationCode(Enum):
    """Validation issue codes"""

    MISSING_AMOUNT = "missing_amount"    # no numeric literal in the transcript
    INVALID_AMOUNT = "invalid_amount"    # literal found but rejected


class InvalidAmountReason(Enum):
    """Why a numeric literal was rejected"""

    NON_POSITIVE = "non_positive"          # zero or negative
    EXCEEDS_CEILING = "exceeds_ceiling"    # above MAX_AMOUNT
    UNPARSEABLE = "unparseable"            # not a valid decimal


# Message templates
ERROR_MESSAGES = {
    ValidationCode.MISSING_AMOUNT: "Please include an amount, e.g. \"I spent 25 dollars on lunch\"",
    ValidationCode.INVALID_AMOUNT: "The amount \"{literal}\" is not valid ({reason})",
}

REASON_MESSAGES = {
    InvalidAmountReason.NON_POSITIVE: "it must be greater than zero",
    InvalidAmountReason.EXCEEDS_CEILING: "it exceeds the maximum of {ceiling}",
    InvalidAmountReason.UNPARSEABLE: "it is not a number",
}


@dataclass(frozen=True)
class ValidationIssue:
    """A validation problem found while interpreting a transcript"""

    code: ValidationCode
    message: str
    reason: Optional[InvalidAmountReason] = None
    details: Optional[dict] = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_code(
        cls,
        code: ValidationCode,
        reason: Optional[InvalidAmountReason] = None,
        **kwargs,
    ) -> "ValidationIssue":
        """Build an issue from its code, filling the message template."""
        params = dict(kwargs)
        if reason is not None:
            params["reason"] = REASON_MESSAGES[reason].format(**kwargs)
        template = ERROR_MESSAGES.get(code, "Could not interpret the expense")
        message = template.format(**params) if params else template
        return cls(code=code, message=message, reason=reason, details=kwargs or None)

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }
