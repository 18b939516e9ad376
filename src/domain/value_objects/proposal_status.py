from __future__ import annotations

from enum import Enum


class ProposalStatus(str, Enum):
    ACTIVE = "Active"
    PASSED = "Passed"
    REJECTED = "Rejected"

    def is_terminal(self) -> bool:
        return self is not ProposalStatus.ACTIVE
