"""Configuration management."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_SYMBOLS = ["🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼"]


class BoardConfig(BaseModel):
    """Board configuration."""

    model_config = ConfigDict(validate_assignment=True)

    symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    pair_count: int = Field(default=8, ge=1)
    columns: int = Field(default=4, ge=1)

    @model_validator(mode="after")
    def check_symbols(self) -> "BoardConfig":
        """Ensure the symbol set can fill the board."""
        if self.pair_count > len(self.symbols):
            raise ValueError(
                f"pair_count ({self.pair_count}) exceeds number of symbols "
                f"({len(self.symbols)})"
            )
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("symbols must be distinct")
        return self


class TimingConfig(BaseModel):
    """Timing configuration."""

    model_config = ConfigDict(validate_assignment=True)

    mismatch_delay: float = Field(default=1.0, ge=0.0)  # Seconds


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(validate_assignment=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: str | None = None  # Keep log output off the curses screen

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class GameLogSettings(BaseModel):
    """Game event log settings (output_path is a directory)."""

    enabled: bool = False
    output_path: str = "logs"


class Config(BaseModel):
    """Root configuration."""

    board: BoardConfig = BoardConfig()
    timing: TimingConfig = TimingConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
