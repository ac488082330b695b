"""Runtime settings read from the environment and an optional dotenv file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Settings the service needs to start."""

    port: str = ""
    db_postgres_url: str = ""


def load_settings(env_file: str | os.PathLike[str] = ".env") -> Settings:
    """Load ``env_file`` if present, then read settings from the environment.

    Variables already set in the environment win over the file.
    """
    path = Path(env_file)
    if path.is_file():
        load_dotenv(path, override=False)
        logger.info("==> EnvFile found!!!")
    return Settings(
        port=os.environ.get("PORT", ""),
        db_postgres_url=os.environ.get("DB_POSTGRES_URL", ""),
    )