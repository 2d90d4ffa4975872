"""In-memory commit history repository."""

import logging
from itertools import islice
from typing import Iterator, List, Optional

from commit_history.config import DEFAULT_CONFIG, HistoryConfig
from commit_history.errors import InvalidArgumentError
from commit_history.models.commit import (
    DEFAULT_SEQUENCE,
    Clock,
    Commit,
    CommitIdSequence,
    utc_now,
)

logger = logging.getLogger(__name__)


class Repository:
    """A named, linear history of commits, most recent first.

    The repository owns a singly linked chain: ``head`` is the newest commit
    and every commit points at the one made before it. The number of commits
    reachable from ``head`` is always ``size``.
    """

    def __init__(
        self,
        name: str,
        *,
        id_sequence: Optional[CommitIdSequence] = None,
        clock: Optional[Clock] = None,
        config: Optional[HistoryConfig] = None,
    ):
        if name is None:
            raise InvalidArgumentError("Repository name must not be None")
        self.name = name
        self.config = config or DEFAULT_CONFIG
        self._id_sequence = id_sequence or DEFAULT_SEQUENCE
        self._clock = clock or utc_now
        self._head: Optional[Commit] = None
        self._size = 0

    @property
    def head(self) -> Optional[str]:
        """Id of the most recent commit, or None when empty."""
        return self._head.id if self._head is not None else None

    @property
    def size(self) -> int:
        """Number of commits in the history."""
        return self._size

    def get_repo_head(self) -> Optional[str]:
        """Same as the ``head`` property."""
        return self.head

    def get_repo_size(self) -> int:
        """Same as the ``size`` property."""
        return self.size

    def commits(self) -> Iterator[Commit]:
        """Walk the history from head to the oldest commit."""
        current = self._head
        while current is not None:
            yield current
            current = current.previous

    def ids(self) -> List[str]:
        """Ids from head to tail."""
        return [commit.id for commit in self.commits()]

    def commit(self, message: str) -> str:
        """Record a new commit on top of the history and return its id.

        A clock reading older than the current head (wall time stepped back)
        is raised to the head's timestamp so the history stays ordered.
        """
        if message is None:
            raise InvalidArgumentError("Commit message must not be None")
        if not isinstance(message, str):
            raise InvalidArgumentError(
                f"Commit message must be a string, got {type(message).__name__}"
            )

        timestamp = self._clock()
        if self._head is not None and timestamp < self._head.timestamp:
            logger.debug(
                "%s: clock went back to %s, keeping head time %s",
                self.name,
                timestamp,
                self._head.timestamp,
            )
            timestamp = self._head.timestamp

        new_commit = Commit.create(
            message,
            previous=self._head,
            sequence=self._id_sequence,
            timestamp=timestamp,
        )
        self._head = new_commit
        self._size += 1
        logger.debug("%s: committed %s (size=%d)", self.name, new_commit.id, self._size)
        return new_commit.id

    def contains(self, target_id: str) -> bool:
        """Check if any commit in the history has the given id."""
        return any(commit.id == target_id for commit in self.commits())

    def history(self, n: int) -> List[str]:
        """Formatted lines for the ``n`` most recent commits, newest first.

        Returns every commit when the history is shorter than ``n``.
        """
        if n < 0:
            raise InvalidArgumentError(f"History count must be non-negative, got {n}")
        timestamp_format = self.config.timestamp_format
        return [
            commit.format(timestamp_format) for commit in islice(self.commits(), n)
        ]

    def get_history(self, n: int) -> str:
        """The ``n`` most recent commits as newline separated text."""
        return "\n".join(self.history(n))

    def drop(self, target_id: str) -> bool:
        """Remove the commit with the given id, keeping the rest of the history.

        Returns False and leaves the repository untouched if no commit matches.
        """
        before: Optional[Commit] = None
        current = self._head
        while current is not None:
            if current.id == target_id:
                if before is None:
                    self._head = current.previous
                else:
                    before.previous = current.previous
                current.previous = None
                self._size -= 1
                logger.debug("%s: dropped %s (size=%d)", self.name, target_id, self._size)
                return True
            before, current = current, current.previous

        logger.debug("%s: drop found no commit %s", self.name, target_id)
        return False

    def synchronize(self, other: "Repository") -> None:
        """Merge all of ``other``'s commits into this history and empty ``other``.

        Both chains are already newest first, so a single merge pass keeps the
        result ordered by timestamp. On equal timestamps this repository's
        commit comes first. Commit objects are moved, not copied.
        """
        if other is self:
            logger.debug("%s: synchronize with itself ignored", self.name)
            return
        if other._head is None:
            logger.debug("%s: nothing to synchronize from %s", self.name, other.name)
            return

        moved = other._size
        if self._head is None:
            self._head = other._head
        else:
            mine, theirs = self._head, other._head
            merged_head: Optional[Commit] = None
            tail: Optional[Commit] = None
            while mine is not None and theirs is not None:
                if mine.timestamp >= theirs.timestamp:
                    node, mine = mine, mine.previous
                else:
                    node, theirs = theirs, theirs.previous
                if tail is None:
                    merged_head = node
                else:
                    tail.previous = node
                tail = node
            tail.previous = mine if mine is not None else theirs
            self._head = merged_head

        self._size += moved
        other._head = None
        other._size = 0
        logger.debug(
            "%s: synchronized %d commits from %s (size=%d)",
            self.name,
            moved,
            other.name,
            self._size,
        )

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Commit]:
        return self.commits()

    def __contains__(self, target_id: object) -> bool:
        return self.contains(target_id)

    def __str__(self) -> str:
        if self._head is None:
            return f"{self.name} - No commits"
        return f"{self.name} - Current head: {self._head.format(self.config.timestamp_format)}"

    def __repr__(self) -> str:
        return f"Repository(name={self.name!r}, size={self._size}, head={self.head!r})"
