"""Stakeholder vote routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from venue_decision.decision.service import decide_votes
from venue_decision.models.decision import VoteTally

router = APIRouter()


class VoteRequest(BaseModel):
    """Votes from dining, program and facilities.

    Values are validated by the aggregator so that an invalid vote is
    rejected as a whole with a 400 response.
    """

    dining_vote: Any = None
    program_vote: Any = None
    facilities_vote: Any = None


@router.post("", response_model=VoteTally)
async def submit_votes(data: VoteRequest) -> VoteTally:
    """Aggregate the three votes into a final decision."""
    return decide_votes(data.dining_vote, data.program_vote, data.facilities_vote)
