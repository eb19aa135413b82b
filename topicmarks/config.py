import os
from dataclasses import dataclass, field
from typing import List


def _default_database_url() -> str:
    db_path = os.environ.get("BOOKMARK_DB", os.path.join(os.getcwd(), "bookmarks.sqlite3"))
    return f"sqlite:///{os.path.abspath(db_path)}"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    database_url: str = "sqlite://"
    api_prefix: str = "/api"
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    link_check_timeout: float = 5.0
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            database_url=env.get("BOOKMARKS_DATABASE_URL") or _default_database_url(),
            api_prefix=env.get("BOOKMARKS_API_PREFIX", "/api").rstrip("/"),
            cors_origins=_split_origins(env.get("BOOKMARKS_CORS_ORIGINS", "")),
            log_level=env.get("BOOKMARKS_LOG_LEVEL", "INFO").upper(),
            link_check_timeout=float(env.get("BOOKMARKS_LINK_CHECK_TIMEOUT", "5.0")),
            host=env.get("BOOKMARKS_HOST", "127.0.0.1"),
            port=int(env.get("BOOKMARKS_PORT", "8000")),
        )
