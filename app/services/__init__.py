"""Service layer: direct lookups, parallel fetches and lookup sessions."""
from .pokedex_service import PokedexService, SessionRegistry
from .pokedex_session import PokedexSession

__all__ = [
    'PokedexService',
    'PokedexSession',
    'SessionRegistry',
]
