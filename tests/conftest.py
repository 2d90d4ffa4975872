"""Shared fixtures for commit-history tests."""

from datetime import datetime, timedelta

import pytest

from commit_history.core.replay import TickingClock
from commit_history.core.repository import Repository
from commit_history.models.commit import CommitIdSequence, reset_ids

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


class FrozenClock:
    """Clock that always reads the same instant."""

    def __init__(self, instant: datetime = BASE_TIME):
        self.instant = instant

    def __call__(self) -> datetime:
        return self.instant


@pytest.fixture(autouse=True)
def fresh_default_ids():
    """Reset the process-wide id counter around every test."""
    reset_ids()
    yield
    reset_ids()


@pytest.fixture
def sequence():
    return CommitIdSequence()


@pytest.fixture
def clock():
    """Clock shared by repositories so commit order is timestamp order."""
    return TickingClock(start=BASE_TIME, step=timedelta(milliseconds=5))


@pytest.fixture
def make_repo(sequence, clock):
    def _make(name: str) -> Repository:
        return Repository(name, id_sequence=sequence, clock=clock)

    return _make


def commit_all(repo: Repository, messages):
    """Commit every message in order, checking the size grows by one each time."""
    ids = []
    for message in messages:
        size = repo.size
        ids.append(repo.commit(message))
        assert repo.size == size + 1
    return ids


def messages(repo: Repository):
    """Commit messages from head to tail."""
    return [commit.message for commit in repo.commits()]
