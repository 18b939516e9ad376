from __future__ import annotations

from sqlalchemy import select

from src.infrastructure.db.orm.membership_token import MembershipTokenORM


async def test_health_is_public(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_mint_and_query_token(client, mint):
    created = await mint("alice.near", cooperative_id="coop-7", role="Voter")
    assert created["owner_id"] == "alice.near"
    assert created["issuance_seq"] == 1
    assert created["minting_round"] == 1
    assert created["round_order"] == 1
    assert created["unique_hash"] == "coop-7-1"
    assert created["titles"] == []

    holder = await client.get("/api/v1/tokens/alice.near/holder")
    assert holder.json() == {"account_id": "alice.near", "is_holder": True}

    role = await client.get("/api/v1/tokens/alice.near/role")
    assert role.json()["governance_role"] == "Voter"

    metadata = await client.get("/api/v1/tokens/alice.near/metadata")
    assert metadata.status_code == 200
    assert metadata.json()["cooperative_id"] == "coop-7"


async def test_queries_for_unknown_account(client):
    holder = await client.get("/api/v1/tokens/ghost.near/holder")
    assert holder.json()["is_holder"] is False

    role = await client.get("/api/v1/tokens/ghost.near/role")
    assert role.json()["governance_role"] is None

    metadata = await client.get("/api/v1/tokens/ghost.near/metadata")
    assert metadata.status_code == 200
    assert metadata.json() is None

    token = await client.get("/api/v1/tokens/ghost.near")
    assert token.status_code == 404
    assert token.json()["code"] == "not_found"


async def test_duplicate_mint_conflicts_and_keeps_state(app, client, mint, auth_headers):
    await mint("alice.near")
    response = await client.post(
        "/api/v1/tokens/",
        json={"account_id": "alice.near", "cooperative_id": "coop-2"},
        headers=auth_headers("admin.near"),
    )
    assert response.status_code == 409
    assert response.json()["code"] == "duplicate_token"

    stats = (await client.get("/api/v1/registry/")).json()
    assert stats["holder_count"] == 1
    assert stats["next_issuance_seq"] == 2

    async with app.state.session_factory() as session:
        result = await session.execute(select(MembershipTokenORM))
        rows = result.scalars().all()
        assert [(r.owner_id, r.cooperative_id) for r in rows] == [("alice.near", "coop-1")]


async def test_mint_requires_admin(client, auth_headers):
    payload = {"account_id": "eve.near", "cooperative_id": "coop-1"}
    anonymous = await client.post("/api/v1/tokens/", json=payload)
    assert anonymous.status_code == 403

    stranger = await client.post("/api/v1/tokens/", json=payload, headers=auth_headers("eve.near"))
    assert stranger.status_code == 403
    assert stranger.json()["code"] == "unauthorized"


async def test_mint_validates_account_id(client, auth_headers):
    response = await client.post(
        "/api/v1/tokens/",
        json={"account_id": "Not An Account", "cooperative_id": "coop-1"},
        headers=auth_headers("admin.near"),
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
    assert response.json()["details"]["errors"]


async def test_invalid_bearer_token_is_rejected(client):
    response = await client.get(
        "/api/v1/tokens/alice.near/holder", headers={"Authorization": "Bearer garbage"}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "auth_error"


async def test_revoke_remint_gets_new_sequence(client, mint, auth_headers):
    first = await mint("alice.near")

    denied = await client.delete("/api/v1/tokens/alice.near", headers=auth_headers("alice.near"))
    assert denied.status_code == 403

    revoked = await client.delete("/api/v1/tokens/alice.near", headers=auth_headers("admin.near"))
    assert revoked.status_code == 200
    assert revoked.json()["issuance_seq"] == first["issuance_seq"]

    missing = await client.delete("/api/v1/tokens/alice.near", headers=auth_headers("admin.near"))
    assert missing.status_code == 404

    again = await mint("alice.near")
    assert again["issuance_seq"] == first["issuance_seq"] + 1


async def test_minting_rounds(client, mint, auth_headers):
    await mint("alice.near")
    await mint("bob.near")

    denied = await client.post("/api/v1/registry/rounds", headers=auth_headers("bob.near"))
    assert denied.status_code == 403

    advanced = await client.post("/api/v1/registry/rounds", headers=auth_headers("admin.near"))
    assert advanced.json() == {"minting_round": 2}

    carol = await mint("carol.near")
    assert (carol["minting_round"], carol["round_order"], carol["issuance_seq"]) == (2, 1, 3)

    alice = (await client.get("/api/v1/tokens/alice.near")).json()
    assert (alice["minting_round"], alice["round_order"]) == (1, 1)


async def test_profile_title_and_handle_updates(client, mint, auth_headers):
    await mint("alice.near")

    avatar = await client.put(
        "/api/v1/tokens/alice.near/profile/avatar",
        json={"value": "ipfs://avatar"},
        headers=auth_headers("alice.near"),
    )
    assert avatar.status_code == 204

    stranger = await client.put(
        "/api/v1/tokens/alice.near/profile/description",
        json={"value": "hijacked"},
        headers=auth_headers("eve.near"),
    )
    assert stranger.status_code == 403

    unknown_field = await client.put(
        "/api/v1/tokens/alice.near/profile/email",
        json={"value": "x"},
        headers=auth_headers("alice.near"),
    )
    assert unknown_field.status_code == 422

    title = await client.post(
        "/api/v1/tokens/alice.near/titles",
        json={"title": "Founder"},
        headers=auth_headers("admin.near"),
    )
    assert title.status_code == 204

    handle = await client.put(
        "/api/v1/tokens/alice.near/external-handle",
        json={"handle": "@alice"},
        headers=auth_headers("alice.near"),
    )
    assert handle.status_code == 204

    token = (await client.get("/api/v1/tokens/alice.near")).json()
    assert token["metadata"]["avatar"] == "ipfs://avatar"
    assert token["metadata"]["description"] is None
    assert token["metadata"]["external_handle"] == "alice"
    assert token["titles"] == ["Founder"]

    missing = await client.post(
        "/api/v1/tokens/ghost.near/titles",
        json={"title": "Founder"},
        headers=auth_headers("admin.near"),
    )
    assert missing.status_code == 404


async def test_transfer_always_fails(client, mint, auth_headers):
    await mint("alice.near")
    response = await client.post(
        "/api/v1/tokens/transfer",
        json={"from_account": "alice.near", "to_account": "bob.near"},
        headers=auth_headers("alice.near"),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "non_transferable"

    assert (await client.get("/api/v1/tokens/alice.near/holder")).json()["is_holder"] is True
    assert (await client.get("/api/v1/tokens/bob.near/holder")).json()["is_holder"] is False


async def test_list_cohort(client, mint):
    await mint("alice.near", cooperative_id="coop-a")
    await mint("bob.near", cooperative_id="coop-b")
    await mint("carol.near", cooperative_id="coop-a")

    response = await client.get("/api/v1/tokens/", params={"cooperative_id": "coop-a"})
    assert response.status_code == 200
    assert [t["owner_id"] for t in response.json()] == ["alice.near", "carol.near"]


async def test_ownership_proof(client, mint):
    await mint("alice.near")
    issued = await client.post("/api/v1/tokens/alice.near/proof")
    assert issued.status_code == 200
    proof = issued.json()
    assert proof["unique_hash"] == "coop-1-1"

    verified = await client.post("/api/v1/tokens/proofs/verify", json=proof)
    assert verified.json() == {"valid": True}

    tampered = dict(proof, unique_hash="coop-1-2")
    rejected = await client.post("/api/v1/tokens/proofs/verify", json=tampered)
    assert rejected.json() == {"valid": False}

    missing = await client.post("/api/v1/tokens/ghost.near/proof")
    assert missing.status_code == 404


async def test_oversized_metadata_is_rejected_before_storage(client, mint, auth_headers):
    too_long_did = await client.post(
        "/api/v1/tokens/",
        json={"account_id": "alice.near", "cooperative_id": "coop-1", "did": "d" * 256},
        headers=auth_headers("admin.near"),
    )
    assert too_long_did.status_code == 422
    assert too_long_did.json()["code"] == "validation_error"

    await mint("alice.near")
    too_long_avatar = await client.put(
        "/api/v1/tokens/alice.near/profile/avatar",
        json={"value": "a" * 1025},
        headers=auth_headers("alice.near"),
    )
    assert too_long_avatar.status_code == 422
    assert too_long_avatar.json()["details"] == {"field": "avatar", "max_length": 1024}

    long_description = await client.put(
        "/api/v1/tokens/alice.near/profile/description",
        json={"value": "d" * 5000},
        headers=auth_headers("alice.near"),
    )
    assert long_description.status_code == 204

    metadata = (await client.get("/api/v1/tokens/alice.near/metadata")).json()
    assert metadata["avatar"] is None
    assert len(metadata["description"]) == 5000
