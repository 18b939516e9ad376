#!/usr/bin/env python3
"""
Issue a bearer token for a governance account.

Operators use this to bootstrap the administrator (who mints the first
membership tokens) or to act on behalf of an account during maintenance.
Optionally prints the account's current registry status.

Usage:
  python scripts/issue_access_token.py --account admin.near [--minutes 30] [--status]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.use_cases.membership import token_queries
from src.config.settings import get_settings
from src.domain.value_objects.account_id import parse_account_id
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def print_status(account_id: str) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            token = await token_queries.get_token(uow, account_id)
            stats = await token_queries.registry_stats(uow)
        if token is None:
            print(f"ℹ️  {account_id} holds no membership token")
        else:
            print(f"🪪  Token #{token.issuance_seq} ({token.unique_hash})")
            print(f"   Role: {token.governance_role}")
            print(f"   Round {token.minting_round}, order {token.round_order}")
        print(f"   Holders: {stats.holder_count} (quorum {stats.quorum})")
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a bearer token for an account")
    parser.add_argument("--account", required=True, help="Account id (token subject)")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")
    parser.add_argument(
        "--status", action="store_true", help="Also print the account's registry status"
    )
    args = parser.parse_args()

    try:
        account_id = parse_account_id(args.account)
    except ValueError as exc:
        print(f"❌ Error: {exc}")
        sys.exit(1)

    settings = get_settings()
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    token = jwt_service.create_access_token(account_id=account_id, expires_minutes=args.minutes)

    if account_id == settings.admin_account:
        print("👑 Account is the configured administrator")
    print("\n🔑 Bearer token:")
    print(f"   {token}")

    if args.status:
        print()
        asyncio.run(print_status(account_id))


if __name__ == "__main__":
    main()
