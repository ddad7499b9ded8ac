import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Query, status
from app.config import get_settings
from app.services import PokedexService, SessionRegistry
from app.dependencies import close_clients, get_pokedex_service, get_session_registry
from app.models import PokemonView, SearchRequest, SessionView

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_clients()

app = FastAPI(
    title="Pokedex Lookup API",
    description="Pokemon lookup widget as a service: direct lookups, parallel fetches and navigable sessions.",
    lifespan=lifespan,
)

# Direct lookup by name or id
@app.get(
    "/pokemon/{name_or_id}",
    response_model=PokemonView,
    summary="Returns one rendered Pokemon record",
)
async def get_pokemon(
    name_or_id: str,
    service: PokedexService = Depends(get_pokedex_service),
):
    """Fetches one record (name, id, sprite, types, height, weight, abilities)."""
    # 404 and 503 are raised by the PokeAPIClient as HTTPExceptions
    return await service.get_pokemon(name_or_id)


# Parallel fetch of several records
@app.get(
    "/pokemon",
    response_model=list[PokemonView],
    summary="Fetches several Pokemon records concurrently",
)
async def get_many_pokemon(
    names: list[str] = Query(...),
    service: PokedexService = Depends(get_pokedex_service),
):
    return await service.fetch_many(names)


# Session endpoints: lookup failures are reported inside the SessionView
@app.post("/sessions", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(registry: SessionRegistry = Depends(get_session_registry)):
    return registry.create().view()


@app.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return registry.get(session_id).view()


@app.post("/sessions/{session_id}/search", response_model=SessionView)
async def search(
    session_id: str,
    request: SearchRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Searches by name or id; an empty query re-fetches the current ID."""
    return await registry.get(session_id).search(request.query)


@app.post("/sessions/{session_id}/previous", response_model=SessionView)
async def previous(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return await registry.get(session_id).previous()


@app.post("/sessions/{session_id}/next", response_model=SessionView)
async def next_pokemon(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return await registry.get(session_id).next()


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    registry.delete(session_id)
