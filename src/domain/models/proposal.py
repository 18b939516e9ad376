from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.domain.value_objects.proposal_status import ProposalStatus


def quorum_for(holder_count: int) -> int:
    """Minimum number of cast votes before a proposal may resolve."""
    return holder_count // 2 + 1


@dataclass(slots=True)
class Proposal:
    id: int
    title: str
    description: str
    proposer: str
    votes_for: int = 0
    votes_against: int = 0
    voters: list[str] = field(default_factory=list)
    status: ProposalStatus = ProposalStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resolved_at: datetime | None = None

    @classmethod
    def create(cls, proposal_id: int, title: str, description: str, proposer: str) -> Proposal:
        return cls(
            id=proposal_id,
            title=title,
            description=description,
            proposer=proposer,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against

    def is_active(self) -> bool:
        return not self.status.is_terminal()

    def has_voted(self, account_id: str) -> bool:
        return account_id in self.voters

    def apply_vote(self, account_id: str, in_favor: bool, holder_count: int) -> bool:
        """Count a vote and resolve the proposal once quorum is reached.

        Callers must have checked that the proposal is active and that the
        account has not voted yet. Returns True when this vote resolved it.
        """
        if in_favor:
            self.votes_for += 1
        else:
            self.votes_against += 1
        self.voters.append(account_id)
        return self.resolve(holder_count)

    def resolve(self, holder_count: int) -> bool:
        """Settle the outcome if the current tally meets quorum."""
        if self.status.is_terminal() or self.total_votes < quorum_for(holder_count):
            return False
        # Ties reject.
        if self.votes_for > self.votes_against:
            self.status = ProposalStatus.PASSED
        else:
            self.status = ProposalStatus.REJECTED
        self.resolved_at = datetime.now(timezone.utc)
        return True


@dataclass(slots=True, frozen=True)
class ProposalView:
    id: int
    title: str
    description: str
    proposer: str
    votes_for: int
    votes_against: int
    voters: tuple[str, ...]
    status: ProposalStatus
    created_at: datetime
    resolved_at: datetime | None = None

    @classmethod
    def from_proposal(cls, proposal: Proposal) -> ProposalView:
        return cls(
            id=proposal.id,
            title=proposal.title,
            description=proposal.description,
            proposer=proposal.proposer,
            votes_for=proposal.votes_for,
            votes_against=proposal.votes_against,
            voters=tuple(proposal.voters),
            status=proposal.status,
            created_at=proposal.created_at,
            resolved_at=proposal.resolved_at,
        )
