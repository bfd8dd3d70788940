"""Pydantic models for the ``parties`` table."""

from pydantic import BaseModel


class Party(BaseModel):
    """Full party record returned from the database."""
    id: int
    name: str
    description: str | None = None


class PartyListResponse(BaseModel):
    message: str = "success"
    data: list[Party] = []


class PartyResponse(BaseModel):
    message: str = "success"
    data: Party | None = None
