from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .scoring import ScoringMechanism
from .search import DEFAULT_DEPTH
from .state import Difficulty

BOARD_SIZES = (4, 6, 10, 16)
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class Config:
    board_size: int = 6
    mechanism: ScoringMechanism = ScoringMechanism.MULTIPLICATION
    difficulty: Difficulty = Difficulty.EASY
    search_depth: int = DEFAULT_DEPTH
    log_level: str = 'INFO'
    debug: bool = False


def _flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config() -> Config:
    """Reads CELLEXT_* environment variables; raises ValueError on bad values."""
    size = int(os.getenv('CELLEXT_BOARD_SIZE', '6'))
    if size not in BOARD_SIZES:
        raise ValueError(f'CELLEXT_BOARD_SIZE must be one of {BOARD_SIZES}, got {size}')
    depth = int(os.getenv('CELLEXT_SEARCH_DEPTH', str(DEFAULT_DEPTH)))
    if depth < 1:
        raise ValueError(f'CELLEXT_SEARCH_DEPTH must be at least 1, got {depth}')
    level = os.getenv('CELLEXT_LOG_LEVEL', 'INFO').upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f'Unknown log level: {level}')
    return Config(
        board_size=size,
        mechanism=ScoringMechanism.parse(os.getenv('CELLEXT_MECHANISM', 'multiplication')),
        difficulty=Difficulty.parse(os.getenv('CELLEXT_DIFFICULTY', 'easy')),
        search_depth=depth,
        log_level=level,
        debug=_flag(os.getenv('FLASK_DEBUG', os.getenv('DEBUG', '0'))),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
