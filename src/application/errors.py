from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class PermissionDenied(AppError):
    code = "forbidden"
    status_code = 403


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


# Membership registry


class DuplicateTokenError(ConflictError):
    code = "duplicate_token"


class UnauthorizedError(PermissionDenied):
    code = "unauthorized"


class NonTransferableError(AppError):
    code = "non_transferable"
    status_code = 400


# Proposals and voting


class NotTokenHolderError(PermissionDenied):
    code = "not_token_holder"


class ProposalNotActiveError(ConflictError):
    code = "proposal_not_active"


class AlreadyVotedError(ConflictError):
    code = "already_voted"
