import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "mongodb://localhost:27017"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    database_name: Optional[str] = None
    timeout_ms: int = 5000
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL") or os.getenv("MONGODB_URI") or DEFAULT_DATABASE_URL,
            database_name=os.getenv("DATABASE_NAME") or None,
            timeout_ms=int(os.getenv("DATABASE_TIMEOUT_MS", 5000)),
            port=int(os.getenv("PORT", 8000)),
        )
