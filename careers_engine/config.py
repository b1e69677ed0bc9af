"""Runtime configuration.

Values come from the environment (a local ``.env`` file is loaded first), so
the CLI, the API server and tests all share one definition of the defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0 Safari/537.36"
)

FetchMode = Literal["browser", "http"]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Engine settings; see ``from_env`` for the environment variable names."""

    input_csv: Path = Path("input.csv")
    output_dir: Path = Path("output")
    log_level: str = "INFO"
    fetch_mode: FetchMode = "browser"
    headless: bool = True
    delay_scale: float = Field(default=1.0, ge=0.0, description="Multiplier for every rate-limit delay.")
    nav_timeout_s: float = 60.0
    http_timeout_s: float = 20.0
    http_max_retries: int = 3
    http_backoff_s: float = 2.0
    port: int = 3000
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            input_csv=Path(os.getenv("INPUT_CSV", "input.csv")),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            fetch_mode=os.getenv("FETCH_MODE", "browser").strip().lower(),
            headless=_env_bool("HEADLESS", True),
            delay_scale=float(os.getenv("DELAY_SCALE", "1.0")),
            nav_timeout_s=float(os.getenv("NAV_TIMEOUT_S", "60")),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "20")),
            http_max_retries=int(os.getenv("HTTP_MAX_RETRIES", "3")),
            http_backoff_s=float(os.getenv("HTTP_BACKOFF_S", "2.0")),
            port=int(os.getenv("PORT", "3000")),
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        )
