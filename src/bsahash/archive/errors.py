"""Error definitions for BSA archive reading."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_BAD_VERSION = "E_BAD_VERSION"
E_NAME_LENGTH = "E_NAME_LENGTH"
E_NAME_DECODE = "E_NAME_DECODE"
E_TRUNCATED = "E_TRUNCATED"


@dataclass
class BsaError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class InvalidFormatError(BsaError):
    pass


class TruncatedInputError(BsaError):
    pass


def truncated(
    label: str, wanted: int, got: int, context: Optional[Dict[str, Any]] = None
) -> TruncatedInputError:
    ctx = {"wanted": wanted, "got": got}
    if context:
        ctx.update(context)
    return TruncatedInputError(
        code=E_TRUNCATED,
        message=f"Short read for {label}: wanted {wanted} bytes, got {got}",
        context=ctx,
    )


__all__ = [
    "BsaError",
    "InvalidFormatError",
    "TruncatedInputError",
    "truncated",
    "E_BAD_VERSION",
    "E_NAME_LENGTH",
    "E_NAME_DECODE",
    "E_TRUNCATED",
]
