import json
import httpx
import logging
from pydantic import ValidationError
from fastapi import HTTPException
import redis.asyncio as aioredis
from redis.exceptions import RedisError
from app.config import get_settings
from app.models import PokemonRecord

logger = logging.getLogger(__name__)

# Custom exception for upstream failures (mapped to 503 Service Unavailable)
class APIClientError(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=f"External API Error: {detail}")

class PokemonNotFoundError(HTTPException):
    def __init__(self, query: str):
        super().__init__(status_code=404, detail=f"Pokemon '{query}' not found.")
        self.query = query

class PokeAPIClient:
    CACHE_PREFIX = "pokemon:record:"

    def __init__(
        self,
        base_url: str | None = None,
        redis_url: str | None = None,
        cache_ttl: int | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.pokeapi_base_url
        self.cache_ttl = settings.cache_ttl if cache_ttl is None else cache_ttl
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.pokeapi_timeout if timeout is None else timeout,
        )
        self.redis = aioredis.from_url(redis_url or settings.redis_url, decode_responses=True)

    @staticmethod
    def normalize(query: str | int) -> str:
        """PokeAPI accepts lower-case names and plain numeric ids."""
        return str(query).strip().lower()

    async def _read_cache(self, key: str) -> dict | None:
        if self.cache_ttl <= 0:
            return None
        try:
            cached = await self.redis.get(self.CACHE_PREFIX + key)
        except RedisError as e:
            # Cache outage degrades to a network lookup
            logger.warning(f"Cache read failed for Pokemon {key}: {e!r}")
            return None
        if cached:
            logger.info(f"Cache hit for Pokemon: {key}")
            return json.loads(cached)
        logger.info(f"Cache miss for Pokemon: {key}")
        return None

    async def _write_cache(self, record: PokemonRecord, data: dict):
        if self.cache_ttl <= 0:
            return
        payload = json.dumps(data)
        # Name and id lookups share the same payload
        try:
            for key in {str(record.id), record.name.lower()}:
                await self.redis.setex(self.CACHE_PREFIX + key, self.cache_ttl, payload)
        except RedisError as e:
            logger.warning(f"Cache write failed for Pokemon {record.name}: {e!r}")

    async def _fetch_record_data(self, normalized: str) -> dict:
        """Performs the network call and classifies the failure modes."""
        try:
            response = await self.client.get(f"/pokemon/{normalized}")
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            # A response was received
            if e.response.status_code == 404:
                raise PokemonNotFoundError(normalized)
            logger.error(f"PokeAPI failed with status {e.response.status_code} for {normalized}")
            raise APIClientError(status_code=503, detail=f"PokeAPI failed with status {e.response.status_code}")
        except httpx.RequestError as e:
            # The request went out but no response came back
            logger.error(f"PokeAPI network error for {normalized}: {e!r}")
            raise APIClientError(status_code=503, detail=f"PokeAPI network error: {str(e)}")
        except ValueError:
            logger.error(f"PokeAPI returned a non-JSON body for {normalized}")
            raise APIClientError(status_code=503, detail="PokeAPI returned an unexpected response format.")

    async def get_pokemon(self, query: str | int) -> PokemonRecord:
        """Fetches one record by name or numeric id, using the cache when possible."""
        normalized = self.normalize(query)
        if not normalized:
            raise PokemonNotFoundError(str(query))

        cached = await self._read_cache(normalized)
        if cached is not None:
            return PokemonRecord.from_api(cached)

        data = await self._fetch_record_data(normalized)
        try:
            record = PokemonRecord.from_api(data)
        except (KeyError, TypeError, AttributeError, ValidationError):
            logger.error(f"PokeAPI returned a malformed record for {normalized}")
            raise APIClientError(status_code=503, detail="PokeAPI returned an unexpected response format.")

        # Only successful, well-formed results get cached
        await self._write_cache(record, data)
        return record

    async def clear_cache(self):
        """Clear the record cache. Useful for testing."""
        keys = await self.redis.keys(f"{self.CACHE_PREFIX}*")
        if keys:
            await self.redis.delete(*keys)

    async def close(self):
        """Close the HTTP and Redis connections (call on app shutdown)."""
        await self.client.aclose()
        await self.redis.aclose()
