"""High-level match holder for Plump."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from .protocol import Command, CommandResult
from .reducer import apply_command
from .state import GameState, initial_state

logger = logging.getLogger(__name__)

DEFAULT_SEED = "dev-seed"


@dataclass
class GameEngine:
    """Hold one state value and the log of commands that were accepted.

    The engine is not thread-safe; callers sharing one engine must apply
    commands one at a time.
    """

    seed: str = DEFAULT_SEED
    state: GameState = field(init=False)
    log: List[Command] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.state = initial_state(self.seed)

    @classmethod
    def from_log(cls, seed: str, commands: Iterable[Union[Command, Mapping[str, Any]]]) -> GameEngine:
        """Rebuild an engine by replaying a recorded command sequence."""
        engine = cls(seed=seed)
        for command in commands:
            result = engine.dispatch(command)
            if not result.accepted:
                assert result.rejection is not None
                logger.warning("Replayed command rejected: %s", result.rejection.message)
        return engine

    def dispatch(self, command: Union[Command, Mapping[str, Any]]) -> CommandResult:
        result = apply_command(self.state, command)
        if result.accepted:
            assert result.command is not None
            self.state = result.state
            self.log.append(result.command)
        return result

    def reset(self, seed: Optional[str] = None) -> None:
        """Start a fresh match, keeping the seed unless a new one is given."""
        if seed is not None:
            self.seed = seed
        self.state = initial_state(self.seed)
        self.log = []
