from __future__ import annotations

from typing import NoReturn

from src.application.errors import NonTransferableError


def execute(from_account: str, to_account: str) -> NoReturn:
    raise NonTransferableError(
        "Membership tokens are non-transferable",
        details={"from": from_account, "to": to_account},
    )
