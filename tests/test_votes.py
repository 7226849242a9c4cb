"""Tests for stakeholder vote aggregation."""

import pytest

from venue_decision.decision.errors import InvalidVoteError
from venue_decision.decision.votes import aggregate_votes, final_decision, parse_vote
from venue_decision.models.decision import VenueDecision, Vote


class TestAggregateVotes:
    """Tests for aggregate_votes."""

    @pytest.mark.parametrize(
        "votes,expected",
        [
            (("Outside", "Outside", "Inside"), VenueDecision.OUTSIDE),
            (("Inside", "Abstain", "Inside"), VenueDecision.INSIDE),
            (("Outside", "Inside", "Abstain"), VenueDecision.DEPENDS),
            (("Abstain", "Abstain", "Abstain"), VenueDecision.DEPENDS),
        ],
    )
    def test_majority_rule(self, votes, expected):
        tally = aggregate_votes(*votes)
        assert tally.final_decision == expected

    def test_unanimous(self):
        assert aggregate_votes("Inside", "Inside", "Inside").final_decision == VenueDecision.INSIDE

    def test_single_concrete_vote_is_depends(self):
        """Test one Outside among abstentions does not decide."""
        tally = aggregate_votes("Outside", "Abstain", "Abstain")
        assert tally.final_decision == VenueDecision.DEPENDS

    def test_tally_echoes_votes(self):
        tally = aggregate_votes("Outside", "Inside", "Abstain")
        assert tally.dining_vote == Vote.OUTSIDE
        assert tally.program_vote == Vote.INSIDE
        assert tally.facilities_vote == Vote.ABSTAIN

    def test_invalid_vote_rejected(self):
        """Test an unknown option raises and names the offending role."""
        with pytest.raises(InvalidVoteError) as exc_info:
            aggregate_votes("Outside", "Maybe", "Inside")

        assert exc_info.value.invalid == {"program_vote": "Maybe"}
        assert "program_vote" in str(exc_info.value)

    def test_all_invalid_roles_reported(self):
        with pytest.raises(InvalidVoteError) as exc_info:
            aggregate_votes(None, "outside", "Inside")
        assert set(exc_info.value.invalid) == {"dining_vote", "program_vote"}

    def test_votes_are_case_sensitive(self):
        with pytest.raises(InvalidVoteError):
            aggregate_votes("OUTSIDE", "Outside", "Outside")


class TestVoteHelpers:
    """Tests for parse_vote and final_decision."""

    def test_parse_vote(self):
        assert parse_vote("Abstain") == Vote.ABSTAIN
        assert parse_vote(Vote.INSIDE) == Vote.INSIDE
        assert parse_vote("Depends") is None
        assert parse_vote(3) is None

    def test_final_decision_is_order_independent(self):
        votes = [Vote.INSIDE, Vote.OUTSIDE, Vote.INSIDE]
        assert final_decision(votes) == final_decision(list(reversed(votes)))
