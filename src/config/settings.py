from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.value_objects.account_id import parse_account_id
from src.domain.value_objects.policy import MintingPolicy, ProfilePolicy


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # Caller identity (bearer JWT, "sub" is the account id)
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    # CORS
    cors_allow_origins: str = "*"
    # Governance
    admin_account: str
    minting_policy: MintingPolicy = MintingPolicy.ADMIN
    profile_policy: ProfilePolicy = ProfilePolicy.OWNER_OR_ADMIN
    # Ownership proofs (falls back to the JWT secret when unset)
    signing_secret_key: SecretStr | None = None
    signing_algorithm: str = "HS256"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("admin_account")
    @classmethod
    def validate_admin_account(cls, value: str) -> str:
        return parse_account_id(value)

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    def get_signing_secret(self) -> str:
        secret = self.signing_secret_key or self.jwt_secret_key
        return secret.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
