from __future__ import annotations

from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AuthError
from src.config.settings import Settings
from src.domain.value_objects.account_id import parse_account_id
from src.infrastructure.auth.context import AuthContext

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the calling account from the bearer token.

    Requests without an Authorization header continue anonymously; operations
    that need a caller reject them further down.
    """

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.auth_context = AuthContext.anonymous()
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        authorization = request.headers.get("Authorization")
        if not authorization:
            return await call_next(request)
        try:
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token)

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            try:
                account_id = parse_account_id(str(subject))
            except ValueError as exc:
                raise AuthError("Token subject is not a valid account id") from exc
            request.state.auth_context = AuthContext(account_id=account_id, claims=claims)
        except AuthError as exc:
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
        return await call_next(request)
