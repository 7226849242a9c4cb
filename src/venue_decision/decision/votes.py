"""Stakeholder vote aggregation.

Dining, program and facilities each vote Outside, Inside or Abstain. Two
matching concrete votes decide; anything else is Depends.
"""

from __future__ import annotations

from venue_decision.decision.errors import InvalidVoteError
from venue_decision.models.decision import VenueDecision, Vote, VoteTally


MAJORITY = 2


def parse_vote(value: object) -> Vote | None:
    """Return the Vote for `value`, or None if it is not a valid vote."""
    if isinstance(value, Vote):
        return value
    try:
        return Vote(value)
    except ValueError:
        return None


def final_decision(votes: list[Vote]) -> VenueDecision:
    """Majority rule over concrete votes."""
    if votes.count(Vote.OUTSIDE) >= MAJORITY:
        return VenueDecision.OUTSIDE
    if votes.count(Vote.INSIDE) >= MAJORITY:
        return VenueDecision.INSIDE
    return VenueDecision.DEPENDS


def aggregate_votes(
    dining_vote: object,
    program_vote: object,
    facilities_vote: object,
) -> VoteTally:
    """Validate the three votes and compute the final decision.

    Raises:
        InvalidVoteError: If any vote is outside {Outside, Inside, Abstain}.
            No tally is produced in that case.
    """
    raw = {
        "dining_vote": dining_vote,
        "program_vote": program_vote,
        "facilities_vote": facilities_vote,
    }
    parsed = {role: parse_vote(value) for role, value in raw.items()}
    invalid = {role: raw[role] for role, vote in parsed.items() if vote is None}
    if invalid:
        raise InvalidVoteError(invalid)

    return VoteTally(
        dining_vote=parsed["dining_vote"],
        program_vote=parsed["program_vote"],
        facilities_vote=parsed["facilities_vote"],
        final_decision=final_decision(list(parsed.values())),
    )
