"""Structured migration errors.

A ``MigrateError`` describes why a source row could not be processed: the
message and code, the underlying exception if any, how loudly to report it
(``MessageLevel``) and what to record for the row in the id map
(``RowStatus``). Levels and statuses outside the known enums are kept as
plain integers. Errors travel as values inside ``RowResult``; the migration
engine decides how to report them. ``RowResult.unwrap()`` is the single
place a ``MigrateError`` is raised, wrapped in ``MigrateFailure``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Generic, Optional, Type, TypeVar, Union

__all__ = ["MessageLevel", "MigrateError", "MigrateFailure", "RowResult", "RowStatus"]

T = TypeVar("T")
E = TypeVar("E", bound=IntEnum)


class MessageLevel(IntEnum):
    ERROR = 1
    WARNING = 2
    NOTICE = 3
    INFORMATIONAL = 4


class RowStatus(IntEnum):
    IMPORTED = 0
    NEEDS_UPDATE = 1
    IGNORED = 2
    FAILED = 3


def _known(enum_cls: Type[E], value: int) -> Union[E, int]:
    """Enum member for ``value``; values outside the enum are kept as given."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class MigrateError:
    message: str = ""
    code: int = 0
    cause: Optional[BaseException] = None
    level: Union[MessageLevel, int] = MessageLevel.ERROR
    status: Union[RowStatus, int] = RowStatus.FAILED

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", "" if self.message is None else str(self.message))
        object.__setattr__(self, "level", _known(MessageLevel, self.level))
        object.__setattr__(self, "status", _known(RowStatus, self.status))

    @classmethod
    def from_exception(cls, exc: BaseException, **kwargs: Any) -> "MigrateError":
        """Describe ``exc`` as a migration error (``cause`` is ``exc``)."""
        return cls(message=str(exc), cause=exc, **kwargs)

    def __str__(self) -> str:
        return self.message


class MigrateFailure(Exception):
    """Raised by ``RowResult.unwrap()`` for failed rows."""

    def __init__(self, error: MigrateError) -> None:
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True)
class RowResult(Generic[T]):
    """Outcome of processing one source row: a value or a ``MigrateError``."""

    value: Optional[T] = None
    error: Optional[MigrateError] = None

    @classmethod
    def ok(cls, value: T) -> "RowResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error: MigrateError) -> "RowResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> Union[RowStatus, int]:
        return RowStatus.IMPORTED if self.error is None else self.error.status

    def unwrap(self) -> T:
        if self.error is not None:
            raise MigrateFailure(self.error) from self.error.cause
        return self.value  # type: ignore[return-value]
