"""Tunables for the move decider and its path search."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class DeciderConfig:
    # Below this length the snake cannot run into itself, the naive move is enough
    min_search_body_length: int = 4
    # A path longer than body_length + margin is accepted as safe
    early_exit_margin: int = 1
    # Yield after every new branch so the search can continue on a later call
    suspend_search: bool = True
    # Require the finished path to end next to its own start
    close_cycle: bool = False
    # Cell placements allowed within one call (None = unbounded)
    max_expansions: Optional[int] = 50_000
    # How often decide_until_move may resume before settling for a fallback
    max_resumes_per_tick: int = 10_000

    def __post_init__(self) -> None:
        if self.min_search_body_length < 1:
            raise ValueError("min_search_body_length must be at least 1")
        if self.early_exit_margin < 0:
            raise ValueError("early_exit_margin cannot be negative")
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError("max_expansions must be positive or None")
        if self.max_resumes_per_tick < 1:
            raise ValueError("max_resumes_per_tick must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DeciderConfig:
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
