"""Replay scenarios of repository operations."""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from commit_history.config import DEFAULT_CONFIG, HistoryConfig
from commit_history.core.repository import Repository
from commit_history.models.commit import DEFAULT_SEQUENCE, CommitIdSequence, utc_now
from commit_history.models.scenario import Action, Scenario, Step

logger = logging.getLogger(__name__)


class TickingClock:
    """Clock that advances by a fixed step on every reading.

    Scenario steps run faster than the system clock resolves, so replays use
    this to give every commit a distinct timestamp in step order.
    """

    def __init__(self, start: Optional[datetime] = None, step: timedelta = timedelta(seconds=1)):
        self._current = start or utc_now().replace(microsecond=0)
        self._step = step

    def __call__(self) -> datetime:
        value = self._current
        self._current += self._step
        return value


class StepResult(BaseModel):
    """Outcome of one replayed step."""

    index: int
    action: Action
    repo: str
    value: Union[bool, str, List[str], None] = None


def run_scenario(
    scenario: Scenario,
    config: Optional[HistoryConfig] = None,
    clock: Optional[TickingClock] = None,
) -> Tuple[Dict[str, Repository], List[StepResult]]:
    """Create the scenario's repositories and apply every step in order."""
    config = config or DEFAULT_CONFIG
    clock = clock or TickingClock()
    sequence = CommitIdSequence() if scenario.reset_ids else DEFAULT_SEQUENCE

    repos = {
        name: Repository(name, id_sequence=sequence, clock=clock, config=config)
        for name in scenario.repositories
    }
    results = []
    for index, step in enumerate(scenario.steps):
        value = _apply_step(step, repos, config)
        logger.debug("step %d %s on %s -> %r", index, step.action.value, step.repo, value)
        results.append(
            StepResult(index=index, action=step.action, repo=step.repo, value=value)
        )
    return repos, results


def _apply_step(
    step: Step, repos: Dict[str, Repository], config: HistoryConfig
) -> Union[bool, str, List[str], None]:
    repo = repos[step.repo]
    if step.action is Action.COMMIT:
        return repo.commit(step.message)
    if step.action is Action.DROP:
        return repo.drop(step.target)
    if step.action is Action.CONTAINS:
        return repo.contains(step.target)
    if step.action is Action.HISTORY:
        count = step.count if step.count is not None else config.default_history_count
        return repo.history(count)
    repo.synchronize(repos[step.other])
    return None
