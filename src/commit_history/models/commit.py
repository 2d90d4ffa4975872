"""Commit model for commit-history repositories."""

from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, Field

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d at %H:%M:%S"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class CommitIdSequence:
    """Monotonic source of commit identifiers.

    Identifiers are the string form of a non-negative integer and only need
    to be unique within the running process.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("start must be non-negative")
        self._next = start

    def next_id(self) -> str:
        """Return the next identifier and advance the counter."""
        value = self._next
        self._next += 1
        return str(value)

    def peek(self) -> int:
        """Return the value the next call to next_id() will use."""
        return self._next

    def reset(self) -> None:
        """Restart the sequence at zero.

        Only safe when no commit created from this sequence is still reachable,
        otherwise identifiers would repeat.
        """
        self._next = 0


DEFAULT_SEQUENCE = CommitIdSequence()


def reset_ids() -> None:
    """Reset the process-wide identifier sequence (test support)."""
    DEFAULT_SEQUENCE.reset()


class Commit(BaseModel):
    """Represents a single commit in a repository history."""

    id: str = Field(frozen=True)
    message: str = Field(frozen=True)
    timestamp: datetime = Field(frozen=True)
    # Link to the chronologically previous commit; owned by the repository chain
    previous: Optional["Commit"] = Field(default=None, exclude=True, repr=False)

    @classmethod
    def create(
        cls,
        message: str,
        previous: Optional["Commit"] = None,
        sequence: Optional[CommitIdSequence] = None,
        clock: Optional[Clock] = None,
        timestamp: Optional[datetime] = None,
    ) -> "Commit":
        """Build a commit with a fresh id.

        The timestamp is read from ``clock`` (UTC now by default) unless one is
        given explicitly.
        """
        sequence = sequence or DEFAULT_SEQUENCE
        if timestamp is None:
            timestamp = (clock or utc_now)()
        return cls(
            id=sequence.next_id(),
            message=message,
            timestamp=timestamp,
            previous=previous,
        )

    def format(self, timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
        """Render as ``<id> at <timestamp>: <message>``."""
        return f"{self.id} at {self.timestamp.strftime(timestamp_format)}: {self.message}"

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        # Compare by value only; following previous would walk the whole chain
        if not isinstance(other, Commit):
            return NotImplemented
        return (
            self.id == other.id
            and self.message == other.message
            and self.timestamp == other.timestamp
        )

    def __hash__(self) -> int:
        return hash(self.id)
