"""Party endpoints: list, get by id, delete.

Parties are read-only apart from deletion.  Candidates of a deleted party
keep existing with ``party_id`` set to NULL by the schema's foreign key.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from election_api.db.storage import Storage, get_storage
from election_api.models.candidate import DeletedResponse
from election_api.models.party import Party, PartyListResponse, PartyResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/parties", response_model=PartyListResponse)
def list_parties(storage: Storage = Depends(get_storage)) -> PartyListResponse:
    rows = storage.all("SELECT * FROM parties")
    return PartyListResponse(data=[Party.model_validate(row) for row in rows])


@router.get("/party/{party_id}", response_model=PartyResponse)
def get_party(
    party_id: int,
    storage: Storage = Depends(get_storage),
) -> PartyResponse:
    """Return a single party; an unknown id yields ``data: null``."""
    row = storage.get("SELECT * FROM parties WHERE id = :id", {"id": party_id})
    return PartyResponse(data=Party.model_validate(row) if row is not None else None)


@router.delete("/party/{party_id}", response_model=DeletedResponse)
def delete_party(
    party_id: int,
    storage: Storage = Depends(get_storage),
) -> DeletedResponse:
    result = storage.run("DELETE FROM parties WHERE id = :id", {"id": party_id})
    logger.info(
        "party_deleted",
        extra={"party_id": party_id, "changes": result.changes},
    )
    return DeletedResponse(changes=result.changes)
