"""Aggregate router for the resource endpoints mounted under ``API_PREFIX``."""

from fastapi import APIRouter

from election_api.routers import candidates, parties

router = APIRouter()
router.include_router(candidates.router, tags=["Candidates"])
router.include_router(parties.router, tags=["Parties"])
