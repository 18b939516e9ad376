from __future__ import annotations

import pytest

from src.application.errors import (
    AlreadyVotedError,
    NotFoundError,
    NotTokenHolderError,
    ProposalNotActiveError,
    ValidationError,
)
from src.application.use_cases.governance import (
    cast_vote,
    create_proposal,
    get_proposal,
    list_proposals,
)
from src.application.use_cases.membership import mint_token, revoke_token
from src.domain.value_objects.proposal_status import ProposalStatus

ADMIN = "admin.near"


async def _holders(uow, *accounts: str) -> None:
    for account in accounts:
        await mint_token.execute(
            uow,
            mint_token.MintTokenInput(account_id=account, cooperative_id="coop-1"),
            caller=ADMIN,
            admin_account=ADMIN,
        )


async def _propose(uow, caller: str, title: str = "Fund the garden") -> int:
    return await create_proposal.execute(
        uow, caller, create_proposal.CreateProposalInput(title=title, description="details")
    )


async def test_create_proposal_requires_holder(uow):
    with pytest.raises(NotTokenHolderError):
        await _propose(uow, "eve.near")
    assert await list_proposals.execute(uow) == []


async def test_create_proposal_rejects_blank_title(uow):
    await _holders(uow, "alice.near")
    with pytest.raises(ValidationError):
        await _propose(uow, "alice.near", title="   ")


async def test_proposal_ids_are_sequential_from_zero(uow):
    await _holders(uow, "alice.near")
    ids = [await _propose(uow, "alice.near", title=f"P{i}") for i in range(3)]
    assert ids == [0, 1, 2]

    views = await list_proposals.execute(uow)
    assert [v.id for v in views] == [0, 1, 2]
    assert [v.title for v in views] == ["P0", "P1", "P2"]
    assert all(v.status is ProposalStatus.ACTIVE for v in views)
    assert views[0].proposer == "alice.near"


async def test_two_holders_split_vote_is_rejected(uow):
    await _holders(uow, "alice.near", "bob.near")
    pid = await _propose(uow, "alice.near")

    first = await cast_vote.execute(uow, "alice.near", pid, True)
    assert first.resolved is False
    assert first.quorum == 2

    second = await cast_vote.execute(uow, "bob.near", pid, False)
    assert second.resolved is True
    assert second.status is ProposalStatus.REJECTED

    view = await get_proposal.execute(uow, pid)
    assert (view.votes_for, view.votes_against) == (1, 1)
    assert view.status is ProposalStatus.REJECTED


async def test_three_holders_pass_at_second_vote_and_block_third(uow):
    await _holders(uow, "alice.near", "bob.near", "carol.near")
    pid = await _propose(uow, "alice.near")

    await cast_vote.execute(uow, "alice.near", pid, True)
    result = await cast_vote.execute(uow, "bob.near", pid, True)
    assert result.resolved is True
    assert result.status is ProposalStatus.PASSED

    with pytest.raises(ProposalNotActiveError):
        await cast_vote.execute(uow, "carol.near", pid, False)

    view = await get_proposal.execute(uow, pid)
    assert (view.votes_for, view.votes_against) == (2, 0)
    assert view.voters == ("alice.near", "bob.near")


async def test_single_holder_resolves_immediately(uow):
    await _holders(uow, "alice.near")
    pid = await _propose(uow, "alice.near")
    result = await cast_vote.execute(uow, "alice.near", pid, False)
    assert result.status is ProposalStatus.REJECTED


@pytest.mark.parametrize("second_choice", [True, False])
async def test_double_vote_rejected_regardless_of_choice(uow, second_choice):
    await _holders(uow, "alice.near", "bob.near", "carol.near", "dave.near")
    pid = await _propose(uow, "alice.near")
    await cast_vote.execute(uow, "alice.near", pid, True)

    with pytest.raises(AlreadyVotedError):
        await cast_vote.execute(uow, "alice.near", pid, second_choice)

    view = await get_proposal.execute(uow, pid)
    assert (view.votes_for, view.votes_against) == (1, 0)


async def test_vote_error_order(uow):
    await _holders(uow, "alice.near")
    with pytest.raises(NotTokenHolderError):
        await cast_vote.execute(uow, "eve.near", 99, True)
    with pytest.raises(NotFoundError):
        await cast_vote.execute(uow, "alice.near", 99, True)


async def test_quorum_uses_holder_count_at_vote_time(uow):
    await _holders(uow, "alice.near", "bob.near", "carol.near", "dave.near")
    pid = await _propose(uow, "alice.near")

    # 4 holders -> quorum 3
    first = await cast_vote.execute(uow, "alice.near", pid, True)
    assert first.quorum == 3 and not first.resolved

    await revoke_token.execute(uow, "dave.near", caller=ADMIN, admin_account=ADMIN)
    await revoke_token.execute(uow, "carol.near", caller=ADMIN, admin_account=ADMIN)

    # 2 holders -> quorum 2, reached now
    second = await cast_vote.execute(uow, "bob.near", pid, True)
    assert second.quorum == 2
    assert second.status is ProposalStatus.PASSED


async def test_revocation_leaves_resolved_proposals_untouched(uow):
    await _holders(uow, "alice.near", "bob.near", "carol.near")
    pid = await _propose(uow, "alice.near")
    await cast_vote.execute(uow, "alice.near", pid, True)
    await cast_vote.execute(uow, "bob.near", pid, True)

    await revoke_token.execute(uow, "bob.near", caller=ADMIN, admin_account=ADMIN)

    view = await get_proposal.execute(uow, pid)
    assert view.status is ProposalStatus.PASSED
    assert (view.votes_for, view.votes_against) == (2, 0)
    assert "bob.near" in view.voters


async def test_revoked_holder_can_no_longer_vote(uow):
    await _holders(uow, "alice.near", "bob.near", "carol.near")
    pid = await _propose(uow, "alice.near")
    await revoke_token.execute(uow, "carol.near", caller=ADMIN, admin_account=ADMIN)
    with pytest.raises(NotTokenHolderError):
        await cast_vote.execute(uow, "carol.near", pid, True)


async def test_get_proposal_missing_returns_none(uow):
    assert await get_proposal.execute(uow, 0) is None


async def test_resolution_counts_ballots_stored_after_the_read(uow):
    await _holders(uow, "alice.near", "bob.near")
    pid = await _propose(uow, "alice.near")
    read = uow.proposals.get_for_update

    async def read_then_other_ballot(proposal_id):
        snapshot = await read(proposal_id)
        # bob's ballot lands between alice's read and her write
        await uow.proposals.record_vote(proposal_id, "bob.near", True)
        return snapshot

    uow.proposals.get_for_update = read_then_other_ballot
    result = await cast_vote.execute(uow, "alice.near", pid, True)

    assert (result.votes_for, result.votes_against) == (2, 0)
    assert result.status is ProposalStatus.PASSED
    view = await get_proposal.execute(uow, pid)
    assert view.voters == ("bob.near", "alice.near")
    assert view.status is ProposalStatus.PASSED


async def test_ballot_on_proposal_resolved_after_the_read_is_refused(uow):
    await _holders(uow, "alice.near", "bob.near", "carol.near")
    pid = await _propose(uow, "alice.near")
    read = uow.proposals.get_for_update

    async def read_then_resolve(proposal_id):
        snapshot = await read(proposal_id)
        uow.proposals.get_for_update = read
        await cast_vote.execute(uow, "alice.near", proposal_id, True)
        await cast_vote.execute(uow, "bob.near", proposal_id, True)
        return snapshot

    uow.proposals.get_for_update = read_then_resolve
    with pytest.raises(ProposalNotActiveError):
        await cast_vote.execute(uow, "carol.near", pid, False)
    view = await get_proposal.execute(uow, pid)
    assert (view.votes_for, view.votes_against) == (2, 0)
    assert view.status is ProposalStatus.PASSED
