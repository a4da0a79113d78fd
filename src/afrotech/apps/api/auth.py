"""Token auth and tenant identity for the HTTP API.

Two kinds of token are accepted when auth is on:

* ``AFROTECH_AUTH_TOKEN``: a shared operator token. The caller names the
  tenant with the ``X-AFROTECH-USER`` header.
* ``AFROTECH_AUTH_USERS``: ``user:token`` pairs, comma separated. A request
  carrying one of these tokens always acts as that user, and naming a
  different user in the header is refused.
"""

from __future__ import annotations

import hmac
import os

from fastapi import HTTPException, Request

AUTH_MODE_ENV = "AFROTECH_AUTH_MODE"
AUTH_TOKEN_ENV = "AFROTECH_AUTH_TOKEN"
AUTH_USERS_ENV = "AFROTECH_AUTH_USERS"
AUTH_HEADER = "X-AFROTECH-TOKEN"
AUTH_COOKIE = "afrotech_token"
USER_HEADER = "X-AFROTECH-USER"
DEFAULT_USER = "local"


class TenantMismatchError(RuntimeError):
    def __init__(self, bound_user: str, claimed_user: str) -> None:
        super().__init__(f"token belongs to {bound_user}, not {claimed_user}")
        self.bound_user = bound_user
        self.claimed_user = claimed_user


def get_auth_mode() -> str:
    return os.getenv(AUTH_MODE_ENV, "token").strip().casefold()


def is_auth_enabled() -> bool:
    return get_auth_mode() == "token"


def user_tokens() -> dict[str, str]:
    """token -> user, parsed from ``AFROTECH_AUTH_USERS``; malformed pairs are skipped."""
    mapping: dict[str, str] = {}
    for pair in os.getenv(AUTH_USERS_ENV, "").split(","):
        user, sep, token = pair.partition(":")
        if sep and user.strip() and token.strip():
            mapping[token.strip()] = user.strip()
    return mapping


def has_configured_tokens() -> bool:
    return bool(os.getenv(AUTH_TOKEN_ENV, "")) or bool(user_tokens())


def extract_token(request: Request) -> str | None:
    return request.headers.get(AUTH_HEADER) or request.cookies.get(AUTH_COOKIE) or None


def _bound_user(provided: str) -> str | None:
    for token, user in user_tokens().items():
        if hmac.compare_digest(provided, token):
            return user
    return None


def is_request_authenticated(request: Request) -> bool:
    if not is_auth_enabled():
        return True
    provided = extract_token(request)
    if not provided:
        return False
    shared = os.getenv(AUTH_TOKEN_ENV, "")
    if shared and hmac.compare_digest(provided, shared):
        return True
    return _bound_user(provided) is not None


def resolve_user(request: Request) -> str:
    """Tenant identity for the request; every stored record is scoped by it.

    Raises ``TenantMismatchError`` when a user-bound token is sent with a
    header naming someone else.
    """
    claimed = (request.headers.get(USER_HEADER) or "").strip()
    provided = extract_token(request) if is_auth_enabled() else None
    bound = _bound_user(provided) if provided else None
    if bound is None:
        return claimed or DEFAULT_USER
    if claimed and claimed != bound:
        raise TenantMismatchError(bound, claimed)
    return bound


def get_current_user(request: Request) -> str:
    try:
        return resolve_user(request)
    except TenantMismatchError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
