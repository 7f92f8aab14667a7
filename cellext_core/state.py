from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .board import BoardState
from .scoring import ScoringMechanism
from .search import DEFAULT_DEPTH


class Difficulty(str, Enum):
    EASY = 'easy'
    HARD = 'hard'

    @classmethod
    def parse(cls, value: object) -> 'Difficulty':
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f'Unknown AI difficulty: {value!r}')


@dataclass(frozen=True)
class GameState:
    """Snapshot handed to the AI: the board and the player to move."""
    board: BoardState
    turn: int = 1  # 0 or 1; the AI plays as the side to move


@dataclass(frozen=True)
class AISettings:
    """AI configuration passed explicitly to choose_move."""
    ai_difficulty: Difficulty = Difficulty.EASY
    scoring_mechanism: ScoringMechanism = ScoringMechanism.MULTIPLICATION
    search_depth: int = DEFAULT_DEPTH
