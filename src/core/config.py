"""Runtime configuration, read from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

from src.core.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    cpu_seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from the environment. Unset variables keep their defaults."""
        env = os.environ if environ is None else environ

        origins = env.get("TICTACTOE_CORS_ORIGINS", "*")
        log_level = env.get("TICTACTOE_LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {log_level!r}")

        seed = env.get("TICTACTOE_CPU_SEED")
        return cls(
            host=env.get("TICTACTOE_HOST", "0.0.0.0"),
            port=_parse_int("PORT", env.get("PORT", "5000")),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_level=log_level,
            cpu_seed=_parse_int("TICTACTOE_CPU_SEED", seed) if seed else None,
        )


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def configure_logging(level: str = "INFO") -> None:
    """One stream handler on the root logger (uvicorn keeps its own handlers)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
