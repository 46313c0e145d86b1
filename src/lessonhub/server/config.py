"""Server configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment."""

    mongo_uri: str = ""
    db_name: str = ""
    host: str = "0.0.0.0"
    port: int = 3000
    mongo_timeout_ms: int = 5000

    # Static lesson images served under /pictures
    public_dir: str = "public"

    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Observability
    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            mongo_uri=os.environ.get("MONGO_URI", ""),
            db_name=os.environ.get("DB_NAME", ""),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "3000")),
            mongo_timeout_ms=int(os.environ.get("MONGO_TIMEOUT_MS", "5000")),
            public_dir=os.environ.get("PUBLIC_DIR", "public"),
            cors_origins=_split_origins(os.environ.get("CORS_ORIGINS", "*")),
            log_format=os.environ.get("LOG_FORMAT", "pretty"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
