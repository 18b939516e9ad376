from __future__ import annotations

from src.application.errors import NotFoundError
from src.application.interfaces.signer import Signer
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ownership_proof import OwnershipProof


async def issue(uow: UnitOfWork, account_id: str, signer: Signer) -> OwnershipProof:
    token = await uow.tokens.get(account_id)
    if token is None:
        raise NotFoundError("Token not found", details={"account_id": account_id})
    message = OwnershipProof.message_for(token.owner_id, token.unique_hash)
    digest = signer.hash(message)
    return OwnershipProof(
        account_id=token.owner_id,
        unique_hash=token.unique_hash,
        digest=digest,
        signature=signer.sign(digest.encode("ascii")),
        algorithm=signer.algorithm,
    )


def verify(proof: OwnershipProof, signer: Signer) -> bool:
    digest = signer.hash(OwnershipProof.message_for(proof.account_id, proof.unique_hash))
    if digest != proof.digest:
        return False
    return signer.verify(proof.signature, digest.encode("ascii"))
