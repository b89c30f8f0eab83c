from __future__ import annotations

import logging

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from prompthub.config import settings

logger = logging.getLogger(__name__)

USER_ID_CLAIMS = ("sub", "userId", "user_id")


def resolve_user_id(token: str | None, *, secret: str | None = None, audience: str | None = None) -> str | None:
    """
    Turn a bearer JWT into the id of the user it was issued to.

    Tokens are HS256-signed with settings.jwt_secret. The audience is only
    checked when one is configured (or passed in). Returns None for anything
    we will not accept: no token, bad signature, expired, wrong audience, or
    no user id claim.
    """
    if not token:
        return None

    aud = audience if audience is not None else settings.jwt_audience
    try:
        claims = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=["HS256"],
            audience=aud,
            options={"verify_aud": aud is not None},
        )
    except ExpiredSignatureError:
        logger.info("Rejected expired bearer token")
        return None
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    for claim in USER_ID_CLAIMS:
        if claims.get(claim):
            return str(claims[claim])
    logger.warning(f"Bearer token carries none of {USER_ID_CLAIMS}")
    return None


def extract_bearer_token(authorization_header: str | None) -> str | None:
    # "Bearer <token>", scheme case-insensitive; anything else is ignored.
    if not authorization_header:
        return None
    scheme, _, token = authorization_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        return None
    return token
