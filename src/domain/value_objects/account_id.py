from __future__ import annotations

import re

# Named accounts: 2-64 chars of lowercase alphanumerics separated by "-", "_" or ".".
_ACCOUNT_RE = re.compile(r"^(([a-z\d]+[\-_])*[a-z\d]+\.)*([a-z\d]+[\-_])*[a-z\d]+$")


def parse_account_id(value: str) -> str:
    account = (value or "").strip()
    if not 2 <= len(account) <= 64 or not _ACCOUNT_RE.match(account):
        raise ValueError(f"Invalid account id: {value!r}")
    return account
