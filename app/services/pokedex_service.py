import asyncio
import logging
import uuid
from collections import OrderedDict
from fastapi import HTTPException
from app.clients.pokeapi_client import PokeAPIClient
from app.config import get_settings
from app.models import PokemonView
from app.services.pokedex_session import PokedexSession

logger = logging.getLogger(__name__)

class PokedexService:
    # Service receives the client via Dependency Injection
    def __init__(self, poke_client: PokeAPIClient):
        self._poke_client = poke_client

    async def get_pokemon(self, query: str) -> PokemonView:
        """
        Direct lookup: fetches one record and renders it for display.
        Client errors (404, 503) propagate unchanged.
        """
        record = await self._poke_client.get_pokemon(query)
        return PokemonView.render(record)

    async def fetch_many(self, queries: list[str]) -> list[PokemonView]:
        """
        Fetches several records concurrently. Each lookup resolves on its own;
        the first failure cancels the rest and fails the whole batch.
        """
        tasks = [asyncio.ensure_future(self._poke_client.get_pokemon(query)) for query in queries]
        try:
            records = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect the cancelled tasks so none is left pending
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [PokemonView.render(record) for record in records]


class SessionRegistry:
    """
    In-memory store of lookup sessions, keyed by an opaque id.

    Holds at most ``max_sessions``; creating one more evicts the least
    recently used session.
    """

    def __init__(self, poke_client: PokeAPIClient, max_sessions: int | None = None):
        self._poke_client = poke_client
        self.max_sessions = get_settings().max_sessions if max_sessions is None else max_sessions
        self._sessions: OrderedDict[str, PokedexSession] = OrderedDict()

    def create(self) -> PokedexSession:
        session = PokedexSession(uuid.uuid4().hex, self._poke_client)
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted least recently used session {evicted_id}")
        return session

    def get(self, session_id: str) -> PokedexSession:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.")
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str):
        if self._sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.")

    def __len__(self) -> int:
        return len(self._sessions)
