from __future__ import annotations

import copy
from dataclasses import replace

import pytest

from src.application.errors import AlreadyVotedError, ProposalNotActiveError
from src.domain.models.membership_token import MembershipToken
from src.domain.models.proposal import Proposal
from src.domain.models.registry_state import RegistryState


class StubStore:
    """Committed state shared by the stub repositories."""

    def __init__(self) -> None:
        self.tokens: dict[str, MembershipToken] = {}
        self.proposals: dict[int, Proposal] = {}
        self.registry = RegistryState()


class StubTokensRepo:
    def __init__(self, store: StubStore) -> None:
        self.store = store

    async def add(self, token: MembershipToken) -> MembershipToken:
        self.store.tokens[token.owner_id] = token
        return token

    async def get(self, owner_id: str) -> MembershipToken | None:
        return copy.deepcopy(self.store.tokens.get(owner_id))

    async def exists(self, owner_id: str) -> bool:
        return owner_id in self.store.tokens

    async def count(self) -> int:
        return len(self.store.tokens)

    async def list_by_cooperative(self, cooperative_id: str) -> list[MembershipToken]:
        tokens = [t for t in self.store.tokens.values() if t.cooperative_id == cooperative_id]
        return sorted(tokens, key=lambda t: t.issuance_seq)

    async def set_metadata_field(self, owner_id: str, field: str, value: str | None) -> bool:
        token = self.store.tokens.get(owner_id)
        if token is None:
            return False
        token.metadata = token.metadata.with_field(field, value)
        return True

    async def append_title(self, owner_id: str, title: str) -> bool:
        token = self.store.tokens.get(owner_id)
        if token is None:
            return False
        token.titles.append(title)
        return True

    async def remove(self, owner_id: str) -> MembershipToken | None:
        return self.store.tokens.pop(owner_id, None)


class StubProposalsRepo:
    def __init__(self, store: StubStore) -> None:
        self.store = store

    async def add(self, proposal: Proposal) -> Proposal:
        self.store.proposals[proposal.id] = copy.deepcopy(proposal)
        return proposal

    async def get(self, proposal_id: int) -> Proposal | None:
        return copy.deepcopy(self.store.proposals.get(proposal_id))

    async def get_for_update(self, proposal_id: int) -> Proposal | None:
        return await self.get(proposal_id)

    async def list_all(self) -> list[Proposal]:
        return [copy.deepcopy(p) for p in self.store.proposals.values()]

    async def record_vote(self, proposal_id: int, voter: str, in_favor: bool) -> Proposal:
        stored = self.store.proposals[proposal_id]
        if not stored.is_active():
            raise ProposalNotActiveError("Proposal is not active")
        if voter in stored.voters:
            raise AlreadyVotedError("Account has already voted")
        if in_favor:
            stored.votes_for += 1
        else:
            stored.votes_against += 1
        stored.voters.append(voter)
        return copy.deepcopy(stored)

    async def mark_resolved(self, proposal: Proposal) -> None:
        stored = self.store.proposals[proposal.id]
        stored.status = proposal.status
        stored.resolved_at = proposal.resolved_at


class StubRegistryRepo:
    def __init__(self, store: StubStore) -> None:
        self.store = store

    async def load(self) -> RegistryState:
        return replace(self.store.registry)

    async def save(self, state: RegistryState) -> None:
        self.store.registry = replace(state)


class StubUnitOfWork:
    """In-memory unit of work; rollback restores the last committed snapshot."""

    def __init__(self) -> None:
        self.store = StubStore()
        self._snapshot = copy.deepcopy(self.store)
        self.tokens = StubTokensRepo(self.store)
        self.proposals = StubProposalsRepo(self.store)
        self.registry = StubRegistryRepo(self.store)
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> StubUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()

    async def commit(self) -> None:
        self.commits += 1
        self._snapshot = copy.deepcopy(self.store)

    async def rollback(self) -> None:
        self.rollbacks += 1
        restored = copy.deepcopy(self._snapshot)
        self.store.tokens = restored.tokens
        self.store.proposals = restored.proposals
        self.store.registry = restored.registry


class StaticCaller:
    def __init__(self, account_id: str | None = None) -> None:
        self.account_id = account_id

    def current_caller(self) -> str | None:
        return self.account_id


@pytest.fixture()
def uow() -> StubUnitOfWork:
    return StubUnitOfWork()


@pytest.fixture()
def caller() -> StaticCaller:
    return StaticCaller()
