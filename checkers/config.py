# checkers/config.py
from dataclasses import dataclass, field
from typing import Optional
import logging
import os
import tomllib

from .board import BOARD_SIZE, DEFAULT_START_ROWS, Side

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    board_size: int = BOARD_SIZE
    start_rows: int = DEFAULT_START_ROWS


@dataclass
class AIConfig:
    ai_side: str = Side.BLACK.value
    difficulty: str = "off"  # off | easy | medium | hard
    medium_depth: int = 4
    hard_depth: int = 7
    seed: Optional[int] = None  # fixed seed makes tie-breaks reproducible

    @property
    def side(self) -> Side:
        return Side(self.ai_side)


@dataclass
class SchedulerConfig:
    # seconds
    first_delay: float = 0.25
    follow_up_delay: float = 0.2


@dataclass
class Config:
    game: GameConfig = field(default_factory=GameConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "checkers.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("game", "ai", "scheduler"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

    def apply_env(self, environ=None) -> "Config":
        environ = os.environ if environ is None else environ
        if environ.get("CHECKERS_DIFFICULTY"):
            self.ai.difficulty = environ["CHECKERS_DIFFICULTY"].lower()
        if environ.get("CHECKERS_START_ROWS"):
            try:
                self.game.start_rows = int(environ["CHECKERS_START_ROWS"])
            except ValueError:
                logger.warning("Ignoring CHECKERS_START_ROWS=%r", environ["CHECKERS_START_ROWS"])
        if environ.get("CHECKERS_LOG_LEVEL"):
            self.log_level = environ["CHECKERS_LOG_LEVEL"].upper()
        return self


def load_config(path: Optional[str] = None) -> Config:
    path = path or os.environ.get("CHECKERS_CONFIG_TOML", "checkers.toml")
    return Config.load_from_toml(path).apply_env()


# single globally importable config instance
CONFIG = load_config()
