"""Pydantic models for the ``candidates`` table.

``party_name`` is not a column: it comes from the LEFT JOIN on ``parties``
and is ``None`` for candidates without a party.  ``industry_connected`` is
returned exactly as stored (normally ``0`` or ``1``).
"""

from typing import Any

from pydantic import BaseModel


class PartyAssignment(BaseModel):
    """Typed view of an update-party body."""
    party_id: int


class Candidate(BaseModel):
    """Candidate row joined with its party name."""
    id: int
    first_name: str
    last_name: str
    industry_connected: Any
    party_id: int | None = None
    party_name: str | None = None


# --- Response envelopes ---

class CandidateListResponse(BaseModel):
    message: str = "success"
    data: list[Candidate] = []


class CandidateResponse(BaseModel):
    message: str = "success"
    data: Candidate | None = None


class CandidateCreatedResponse(BaseModel):
    """The input body is echoed back alongside the generated id."""
    message: str = "success"
    data: dict[str, Any]
    id: int


class CandidateUpdatedResponse(BaseModel):
    message: str = "success"
    data: dict[str, Any]
    changes: int


class DeletedResponse(BaseModel):
    """Shared by candidate and party deletes; ``changes`` is 0 when nothing matched."""
    message: str = "successfully deleted"
    changes: int
