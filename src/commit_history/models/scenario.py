"""Scenario model for replaying repository operations."""

import json
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from commit_history.errors import ConfigError


class Action(str, Enum):
    """Operation performed by a scenario step."""

    COMMIT = "commit"
    DROP = "drop"
    SYNCHRONIZE = "synchronize"
    HISTORY = "history"
    CONTAINS = "contains"


class Step(BaseModel):
    """A single operation applied to a named repository."""

    action: Action
    repo: str
    message: Optional[str] = None  # For commit
    target: Optional[str] = None  # For drop and contains
    other: Optional[str] = None  # For synchronize
    count: Optional[int] = None  # For history, falls back to config default

    @model_validator(mode="after")
    def _check_arguments(self) -> "Step":
        if self.action is Action.COMMIT and self.message is None:
            raise ValueError("commit step needs a message")
        if self.action in (Action.DROP, Action.CONTAINS) and self.target is None:
            raise ValueError(f"{self.action.value} step needs a target")
        if self.action is Action.SYNCHRONIZE and self.other is None:
            raise ValueError("synchronize step needs another repository")
        return self


class Scenario(BaseModel):
    """Repositories to create and the steps to run against them."""

    repositories: List[str] = Field(min_length=1)
    steps: List[Step] = []
    reset_ids: bool = True

    @model_validator(mode="after")
    def _check_repositories(self) -> "Scenario":
        if len(set(self.repositories)) != len(self.repositories):
            raise ValueError("repository names must be unique")
        known = set(self.repositories)
        for index, step in enumerate(self.steps):
            for name in (step.repo, step.other):
                if name is not None and name not in known:
                    raise ValueError(f"step {index} uses unknown repository '{name}'")
        return self

    @classmethod
    def load(cls, path: Path) -> "Scenario":
        """Read and validate a scenario from a JSON file."""
        scenario_file = Path(path)
        try:
            data = json.loads(scenario_file.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"Scenario file not found: {scenario_file}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {scenario_file}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid scenario in {scenario_file}: {e}") from e
