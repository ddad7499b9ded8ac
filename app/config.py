import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    pokeapi_base_url: str
    pokeapi_timeout: float
    redis_url: str
    cache_ttl: int
    log_level: str
    max_sessions: int


@lru_cache
def get_settings() -> Settings:
    """Reads configuration from the environment once per process."""
    return Settings(
        pokeapi_base_url=os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2"),
        pokeapi_timeout=float(os.getenv("POKEAPI_TIMEOUT", "5.0")),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379"),
        cache_ttl=int(os.getenv("CACHE_TTL", "3600")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        max_sessions=int(os.getenv("MAX_SESSIONS", "1000")),
    )
