"""Candidate endpoints.

GET    /candidates       -- every candidate, joined with its party name
GET    /candidate/{id}   -- one candidate, ``data: null`` when absent
POST   /candidate        -- create; 400 when a required field is missing
PUT    /candidate/{id}   -- assign a party; 400 when ``party_id`` is missing
DELETE /candidate/{id}   -- delete; ``changes: 0`` when nothing matched
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from election_api.core.validation import CANDIDATE_CREATE_FIELDS, PARTY_ASSIGNMENT_FIELDS
from election_api.db.storage import Storage, get_storage
from election_api.models.candidate import (
    Candidate,
    CandidateCreatedResponse,
    CandidateListResponse,
    CandidateResponse,
    CandidateUpdatedResponse,
    DeletedResponse,
    PartyAssignment,
)
from election_api.routers._body import coerce_body, request_body, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()

_SELECT_WITH_PARTY = """
    SELECT candidates.*, parties.name AS party_name
    FROM candidates
    LEFT JOIN parties ON candidates.party_id = parties.id
"""


@router.get("/candidates", response_model=CandidateListResponse)
def list_candidates(
    storage: Storage = Depends(get_storage),
) -> CandidateListResponse:
    """Return all candidates, including those without a party."""
    rows = storage.all(_SELECT_WITH_PARTY)
    return CandidateListResponse(
        data=[Candidate.model_validate(row) for row in rows],
    )


@router.get("/candidate/{candidate_id}", response_model=CandidateResponse)
def get_candidate(
    candidate_id: int,
    storage: Storage = Depends(get_storage),
) -> CandidateResponse:
    """Return a single candidate; an unknown id yields ``data: null``."""
    row = storage.get(
        _SELECT_WITH_PARTY + " WHERE candidates.id = :id",
        {"id": candidate_id},
    )
    return CandidateResponse(
        data=Candidate.model_validate(row) if row is not None else None,
    )


@router.post("/candidate", response_model=CandidateCreatedResponse)
def create_candidate(
    body: dict[str, Any] = Depends(request_body),
    storage: Storage = Depends(get_storage),
) -> CandidateCreatedResponse:
    """Insert a candidate and echo the body back with its new id.

    Only presence is checked, before any storage access; values are bound
    as received and column affinity decides how SQLite stores them.
    """
    require_fields(body, CANDIDATE_CREATE_FIELDS)

    result = storage.run(
        """
        INSERT INTO candidates (first_name, last_name, industry_connected)
        VALUES (:first_name, :last_name, :industry_connected)
        """,
        {
            "first_name": body["first_name"],
            "last_name": body["last_name"],
            "industry_connected": body["industry_connected"],
        },
    )
    logger.info("candidate_created", extra={"candidate_id": result.last_id})
    return CandidateCreatedResponse(data=body, id=result.last_id)


@router.put("/candidate/{candidate_id}", response_model=CandidateUpdatedResponse)
def update_candidate_party(
    candidate_id: int,
    body: dict[str, Any] = Depends(request_body),
    storage: Storage = Depends(get_storage),
) -> CandidateUpdatedResponse:
    """Set the candidate's party reference; nothing else is touched."""
    require_fields(body, PARTY_ASSIGNMENT_FIELDS)
    assignment = coerce_body(PartyAssignment, body)

    result = storage.run(
        "UPDATE candidates SET party_id = :party_id WHERE id = :id",
        {"party_id": assignment.party_id, "id": candidate_id},
    )
    logger.info(
        "candidate_party_updated",
        extra={
            "candidate_id": candidate_id,
            "party_id": assignment.party_id,
            "changes": result.changes,
        },
    )
    return CandidateUpdatedResponse(data=body, changes=result.changes)


@router.delete("/candidate/{candidate_id}", response_model=DeletedResponse)
def delete_candidate(
    candidate_id: int,
    storage: Storage = Depends(get_storage),
) -> DeletedResponse:
    """Delete a candidate by id."""
    result = storage.run(
        "DELETE FROM candidates WHERE id = :id",
        {"id": candidate_id},
    )
    logger.info(
        "candidate_deleted",
        extra={"candidate_id": candidate_id, "changes": result.changes},
    )
    return DeletedResponse(changes=result.changes)
