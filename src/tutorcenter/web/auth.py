"""Authentication middleware and dependencies.

Identity is owned by a third-party provider. The provider issues signed
session JWTs to the browser; this module only verifies them with PyJWT and
attaches the resulting identity to ``request.state.auth``. The middleware
never rejects a request itself; routes that need a user depend on
``require_user``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import jwt
import structlog
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from tutorcenter.config.app_config import AuthConfig
from tutorcenter.web.errors import UnauthenticatedError

logger = structlog.get_logger(__name__)

SESSION_COOKIE = "__session"


@dataclass
class AuthContext:
    """Identity attached to a request."""

    user_id: str | None = None
    session_id: str | None = None
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def is_signed_in(self) -> bool:
        return self.user_id is not None


ANONYMOUS = AuthContext()


class TokenVerifier:
    """Verifies provider-issued JWTs.

    Uses the provider's JWKS endpoint (RS256) when configured, otherwise a
    shared HS256 secret.
    """

    def __init__(self, config: AuthConfig):
        self.config = config
        self._jwks_client = jwt.PyJWKClient(config.jwks_url) if config.jwks_url else None

    def _signing_key(self, token: str) -> tuple[Any, list[str]]:
        if self._jwks_client is not None:
            return self._jwks_client.get_signing_key_from_jwt(token).key, ["RS256"]
        return self.config.jwt_secret, ["HS256"]

    def verify(self, token: str) -> AuthContext:
        """Decode and verify a token.

        Returns:
            AuthContext for the token subject, or an anonymous context if
            the token is invalid or verification is not configured.
        """
        if not self.config.enabled:
            return ANONYMOUS

        try:
            key, algorithms = self._signing_key(token)
            claims = jwt.decode(
                token,
                key,
                algorithms=algorithms,
                audience=self.config.audience,
                issuer=self.config.issuer,
                leeway=self.config.leeway_seconds,
                options={
                    "require": ["sub", "exp"],
                    "verify_aud": self.config.audience is not None,
                },
            )
        except jwt.PyJWTError as e:
            logger.info("auth.token_rejected", reason=str(e))
            return ANONYMOUS

        return AuthContext(user_id=claims["sub"], session_id=claims.get("sid"), claims=claims)


def extract_token(request: Request) -> str | None:
    """Bearer token from the Authorization header, else the session cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return request.cookies.get(SESSION_COOKIE)


class AuthMiddleware(BaseHTTPMiddleware):
    """Attach an AuthContext to every request.

    Verification runs in the threadpool: a JWKS cache miss fetches keys over
    HTTP with a blocking client.
    """

    def __init__(self, app, verifier: TokenVerifier):
        super().__init__(app)
        self.verifier = verifier

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = extract_token(request)
        if token:
            request.state.auth = await run_in_threadpool(self.verifier.verify, token)
        else:
            request.state.auth = ANONYMOUS
        return await call_next(request)


def get_auth(request: Request) -> AuthContext:
    """Dependency returning the request's AuthContext."""
    return getattr(request.state, "auth", ANONYMOUS)


def require_user(request: Request) -> str:
    """Dependency returning the signed-in user id, or 401."""
    auth = get_auth(request)
    if not auth.is_signed_in:
        raise UnauthenticatedError()
    return auth.user_id


def enforce_configured_auth(request: Request) -> None:
    """Router dependency: require a user only when ``auth.required`` is set."""
    config = request.app.state.config
    if config.auth.required and not get_auth(request).is_signed_in:
        raise UnauthenticatedError()
