import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_MAX_RETRIES = 3


def load_env(env_path: Optional[Path] = None) -> None:
    """Load .env from the working directory if present.

    Values already in the environment win over the file.
    """
    env_path = env_path or Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


@dataclass(frozen=True)
class Settings:
    source: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_number(name: str, default, cast, minimum=None):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {raw!r}")
    return value


def check_log_level(level: str, name: str = "JOBCATALOG_LOG_LEVEL") -> str:
    level = level.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def get_settings() -> Settings:
    """Build Settings from JOBCATALOG_* environment variables.

    Raises ValueError naming the variable when a value is unusable.
    """
    return Settings(
        source=os.getenv("JOBCATALOG_SOURCE") or None,
        log_level=check_log_level(os.getenv("JOBCATALOG_LOG_LEVEL") or DEFAULT_LOG_LEVEL),
        log_dir=Path(os.getenv("JOBCATALOG_LOG_DIR") or DEFAULT_LOG_DIR),
        http_timeout=_env_number("JOBCATALOG_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float, minimum=0),
        max_retries=_env_number("JOBCATALOG_MAX_RETRIES", DEFAULT_MAX_RETRIES, int, minimum=0),
    )
