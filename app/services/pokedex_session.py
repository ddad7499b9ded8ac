import logging
from fastapi import HTTPException
from app.clients.pokeapi_client import PokeAPIClient
from app.models import NOT_FOUND_MESSAGE, PokemonView, SessionStatus, SessionView

logger = logging.getLogger(__name__)

class PokedexSession:
    """
    Owns the "current ID" of one lookup widget and the actions that move it.

    Every action bumps the request generation before awaiting the network;
    a response that comes back after a newer action has started is dropped
    without touching the state.
    """

    FIRST_ID = 1

    def __init__(self, session_id: str, poke_client: PokeAPIClient):
        self.session_id = session_id
        self._poke_client = poke_client
        self.current_id = self.FIRST_ID
        self.query = ""
        self.status: SessionStatus = "idle"
        self.pokemon: PokemonView | None = None
        self.error: str | None = None
        self.generation = 0

    def view(self) -> SessionView:
        return SessionView(
            session_id=self.session_id,
            current_id=self.current_id,
            query=self.query,
            status=self.status,
            pokemon=self.pokemon,
            error=self.error,
        )

    async def search(self, query: str = "") -> SessionView:
        """Looks up a name or id; an empty query re-fetches the current ID."""
        self.query = query
        target = query.strip().lower() or str(self.current_id)
        return await self._lookup(target)

    async def previous(self) -> SessionView:
        return await self._lookup(str(max(self.current_id - 1, self.FIRST_ID)))

    async def next(self) -> SessionView:
        # No upper bound: an unknown id simply renders the error message
        return await self._lookup(str(self.current_id + 1))

    async def _lookup(self, target: str) -> SessionView:
        self.generation += 1
        generation = self.generation
        self.status = "loading"

        try:
            record = await self._poke_client.get_pokemon(target)
        except HTTPException as e:
            logger.warning(f"Session {self.session_id}: lookup of {target} failed ({e.status_code}: {e.detail})")
            return self._fail(generation, target)
        except Exception:
            # Anything else (cache, parsing) still ends in the same message
            logger.exception(f"Session {self.session_id}: unexpected error looking up {target}")
            return self._fail(generation, target)

        if generation != self.generation:
            logger.info(f"Session {self.session_id}: dropping superseded response for {target}")
            return self.view()

        self.current_id = record.id
        self.pokemon = PokemonView.render(record)
        self.error = None
        self.query = ""
        self.status = "ready"
        return self.view()

    def _fail(self, generation: int, target: str) -> SessionView:
        if generation != self.generation:
            logger.info(f"Session {self.session_id}: dropping superseded failure for {target}")
            return self.view()
        self.status = "error"
        self.pokemon = None
        self.error = NOT_FOUND_MESSAGE
        return self.view()
