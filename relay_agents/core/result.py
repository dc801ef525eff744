"""Typed outcome of handling one chat message."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Why a chat message could not be answered."""

    VALIDATION = "validation"
    AGENT_NOT_FOUND = "agent_not_found"
    INTERNAL = "internal"


@dataclass
class ChatResult:
    """Either a wire payload or an error kind with a message."""

    payload: Optional[dict[str, Any]] = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, payload: dict[str, Any]) -> "ChatResult":
        return cls(payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, error: str) -> "ChatResult":
        return cls(error_kind=kind, error=error)
