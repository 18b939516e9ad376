from __future__ import annotations

from collections.abc import Awaitable
from typing import NoReturn, TypeVar

from src.application.errors import AuthError, InfrastructureError
from src.application.interfaces.caller import CallerIdentity
from src.application.interfaces.signer import Signer
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.governance import (
    cast_vote,
    create_proposal,
    get_proposal,
    list_proposals,
)
from src.application.use_cases.membership import (
    add_title,
    advance_minting_round,
    link_external_handle,
    mint_token,
    ownership_proof,
    revoke_token,
    token_queries,
    transfer_token,
    update_profile,
)
from src.domain.models.membership_token import MembershipToken, TokenMetadata
from src.domain.models.ownership_proof import OwnershipProof
from src.domain.models.proposal import ProposalView
from src.domain.value_objects.policy import MintingPolicy, ProfilePolicy
from src.domain.value_objects.profile_field import ProfileField

T = TypeVar("T")


class GovernanceFacade:
    """Entry point for every registry and voting operation.

    Each call runs inside the injected unit of work. Any failure rolls the
    transaction back before the error propagates, so callers never observe a
    partially applied operation.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        caller: CallerIdentity,
        *,
        admin_account: str,
        minting_policy: MintingPolicy = MintingPolicy.ADMIN,
        profile_policy: ProfilePolicy = ProfilePolicy.OWNER_OR_ADMIN,
        signer: Signer | None = None,
    ) -> None:
        self._uow = uow
        self._caller = caller
        self.admin_account = admin_account
        self.minting_policy = minting_policy
        self.profile_policy = profile_policy
        self._signer = signer

    def _require_caller(self) -> str:
        caller = self._caller.current_caller()
        if caller is None:
            raise AuthError("Authentication required")
        return caller

    async def _atomic(self, operation: Awaitable[T]) -> T:
        try:
            return await operation
        except Exception:
            await self._uow.rollback()
            raise

    # Membership registry

    async def mint(self, payload: mint_token.MintTokenInput) -> MembershipToken:
        return await self._atomic(
            mint_token.execute(
                self._uow,
                payload,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
                policy=self.minting_policy,
            )
        )

    async def revoke(self, account_id: str) -> MembershipToken:
        return await self._atomic(
            revoke_token.execute(
                self._uow,
                account_id,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
            )
        )

    async def advance_minting_round(self) -> int:
        return await self._atomic(
            advance_minting_round.execute(
                self._uow,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
            )
        )

    async def update_profile_field(
        self, account_id: str, field: ProfileField, value: str | None
    ) -> None:
        await self._atomic(
            update_profile.execute(
                self._uow,
                account_id,
                field,
                value,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
                policy=self.profile_policy,
            )
        )

    async def add_title(self, account_id: str, title: str) -> None:
        await self._atomic(
            add_title.execute(
                self._uow,
                account_id,
                title,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
                policy=self.minting_policy,
            )
        )

    async def link_external_handle(self, account_id: str, handle: str) -> None:
        await self._atomic(
            link_external_handle.execute(
                self._uow,
                account_id,
                handle,
                caller=self._caller.current_caller(),
                admin_account=self.admin_account,
                policy=self.profile_policy,
            )
        )

    def transfer(self, from_account: str, to_account: str) -> NoReturn:
        transfer_token.execute(from_account, to_account)

    async def is_holder(self, account_id: str) -> bool:
        return await token_queries.is_holder(self._uow, account_id)

    async def token_metadata(self, account_id: str) -> TokenMetadata | None:
        return await token_queries.metadata_of(self._uow, account_id)

    async def governance_role(self, account_id: str) -> str | None:
        return await token_queries.role_of(self._uow, account_id)

    async def get_token(self, account_id: str) -> MembershipToken | None:
        return await token_queries.get_token(self._uow, account_id)

    async def list_cohort(self, cooperative_id: str) -> list[MembershipToken]:
        return await token_queries.list_cohort(self._uow, cooperative_id)

    async def registry_stats(self) -> token_queries.RegistryStats:
        return await token_queries.registry_stats(self._uow)

    async def issue_ownership_proof(self, account_id: str) -> OwnershipProof:
        return await ownership_proof.issue(self._uow, account_id, self._require_signer())

    def verify_ownership_proof(self, proof: OwnershipProof) -> bool:
        return ownership_proof.verify(proof, self._require_signer())

    def _require_signer(self) -> Signer:
        if self._signer is None:
            raise InfrastructureError("Ownership proof signer not configured")
        return self._signer

    # Proposals and voting

    async def create_proposal(self, title: str, description: str) -> int:
        caller = self._require_caller()
        return await self._atomic(
            create_proposal.execute(
                self._uow,
                caller,
                create_proposal.CreateProposalInput(title=title, description=description),
            )
        )

    async def vote(self, proposal_id: int, in_favor: bool) -> cast_vote.VoteResult:
        caller = self._require_caller()
        return await self._atomic(cast_vote.execute(self._uow, caller, proposal_id, in_favor))

    async def get_proposal(self, proposal_id: int) -> ProposalView | None:
        return await get_proposal.execute(self._uow, proposal_id)

    async def get_all_proposals(self) -> list[ProposalView]:
        return await list_proposals.execute(self._uow)
