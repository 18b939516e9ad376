from __future__ import annotations

from typing import Protocol

from src.domain.models.proposal import Proposal


class ProposalRepository(Protocol):
    async def add(self, proposal: Proposal) -> Proposal: ...

    async def get(self, proposal_id: int) -> Proposal | None: ...

    async def get_for_update(self, proposal_id: int) -> Proposal | None:
        """Load a proposal and hold it against concurrent votes until commit."""
        ...

    async def list_all(self) -> list[Proposal]: ...

    async def record_vote(self, proposal_id: int, voter: str, in_favor: bool) -> Proposal:
        """Store the ballot and bump the tally in place; returns the stored proposal.

        Raises ProposalNotActiveError when the proposal resolved in the meantime
        and AlreadyVotedError when the account already has a ballot.
        """
        ...

    async def mark_resolved(self, proposal: Proposal) -> None: ...
