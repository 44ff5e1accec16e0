import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from collector.errors import ConfigError
from collector.extractor import DEFAULT_BACKUP_THRESHOLD
from collector.http_client import DEFAULT_TIMEOUT_MS
from collector.models import DEFAULT_MAX_ITEMS, SearchTarget

logger = logging.getLogger(__name__)


def default_search_targets() -> List[SearchTarget]:
    return [
        SearchTarget(query="나솔", start=1),
        SearchTarget(query="나는 솔로", start=1),
        SearchTarget(query="나솔", start=11),
    ]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


@dataclass
class CollectorConfig:
    max_items: int = DEFAULT_MAX_ITEMS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    search_targets: List[SearchTarget] = field(default_factory=default_search_targets)
    db_path: Optional[str] = "articles.db"
    enable_database: bool = True
    run_deadline_s: Optional[float] = None  # No overall deadline by default
    backup_threshold: int = DEFAULT_BACKUP_THRESHOLD

    @classmethod
    def from_env(cls) -> "CollectorConfig":
        """
        Reads the collector settings from the environment.
        Call load_dotenv() first if a .env file should be honoured.
        """
        config = cls(
            max_items=_env_int("COLLECTOR_MAX_ITEMS", DEFAULT_MAX_ITEMS),
            timeout_ms=_env_int("COLLECTOR_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            db_path=os.getenv("DATABASE_PATH", "articles.db"),
            enable_database=_env_flag("ENABLE_DATABASE", "true"),
            run_deadline_s=_env_int("COLLECTOR_RUN_DEADLINE_S", None),
        )
        config.validate()
        return config

    def validate(self):
        if self.max_items <= 0:
            raise ConfigError(f"max_items must be positive, got {self.max_items}")
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if not self.search_targets:
            raise ConfigError("At least one search target is required")
        if self.enable_database and not self.db_path:
            raise ConfigError("DATABASE_PATH is required when the database is enabled")
        if self.run_deadline_s is not None and self.run_deadline_s <= 0:
            raise ConfigError(f"run_deadline_s must be positive, got {self.run_deadline_s}")
