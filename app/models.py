from typing import Literal

from pydantic import BaseModel, Field

# Fixed message shown by a session for every failed lookup
NOT_FOUND_MESSAGE = "Pokémon not found. Please try again."

SessionStatus = Literal["idle", "loading", "ready", "error"]


# Model for the raw Pokemon record fetched from PokeAPI (Internal Contract)
class PokemonRecord(BaseModel):
    id: int
    name: str
    sprite: str | None = None
    types: list[str] = Field(default_factory=list)
    height: int  # decimetres
    weight: int  # hectograms
    abilities: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "PokemonRecord":
        """Projects a /pokemon/{nameOrId} payload onto the fields we display."""
        return cls(
            id=data["id"],
            name=data["name"],
            sprite=(data.get("sprites") or {}).get("front_default"),
            types=[entry["type"]["name"] for entry in data.get("types", [])],
            height=data["height"],
            weight=data["weight"],
            abilities=[entry["ability"]["name"] for entry in data.get("abilities", [])],
        )


# Model for a rendered record (Public Contract)
class PokemonView(BaseModel):
    id: int
    name: str
    sprite: str | None
    types: list[str]
    height: float  # metres
    weight: float  # kilograms
    abilities: list[str]

    @classmethod
    def render(cls, record: PokemonRecord) -> "PokemonView":
        return cls(
            id=record.id,
            name=record.name.upper(),
            sprite=record.sprite,
            types=record.types,
            height=record.height / 10,
            weight=record.weight / 10,
            abilities=record.abilities,
        )


# Snapshot of one lookup session, returned by every session endpoint
class SessionView(BaseModel):
    session_id: str
    current_id: int
    query: str
    status: SessionStatus
    pokemon: PokemonView | None
    error: str | None


class SearchRequest(BaseModel):
    query: str = ""
