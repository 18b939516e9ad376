from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RegistryState:
    """Counters shared by the membership registry and the proposal store.

    ``next_issuance_seq`` and ``next_proposal_id`` only ever grow, so values
    handed out are never reused, even after a token is revoked.
    """

    next_issuance_seq: int = 1
    minting_round: int = 1
    round_order: int = 0
    next_proposal_id: int = 0

    def allocate_issuance(self) -> tuple[int, int]:
        seq = self.next_issuance_seq
        self.next_issuance_seq += 1
        self.round_order += 1
        return seq, self.round_order

    def advance_round(self) -> int:
        self.minting_round += 1
        self.round_order = 0
        return self.minting_round

    def allocate_proposal_id(self) -> int:
        proposal_id = self.next_proposal_id
        self.next_proposal_id += 1
        return proposal_id
