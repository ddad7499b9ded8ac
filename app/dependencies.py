from app.clients import PokeAPIClient
from app.services import PokedexService, SessionRegistry
from fastapi import Depends

_poke_client = None
_session_registry = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_session_registry(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> SessionRegistry:
    global _session_registry
    if _session_registry is None:
        _session_registry = SessionRegistry(poke_client=poke_client)
    return _session_registry

def get_pokedex_service(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> PokedexService:
    return PokedexService(poke_client=poke_client)

async def close_clients():
    global _poke_client, _session_registry
    if _poke_client is not None:
        await _poke_client.close()
    _poke_client = None
    _session_registry = None
