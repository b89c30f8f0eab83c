from __future__ import annotations

import time

import jwt

from prompthub.dto.req.prompt_req import PromptUpdate
from prompthub.utils.jwtutils import extract_bearer_token, resolve_user_id

SECRET = "test-secret-key"


def _token(payload: dict, secret: str = SECRET) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def test_resolve_user_id_from_sub() -> None:
    assert resolve_user_id(_token({"sub": "alice"})) == "alice"


def test_resolve_user_id_alternate_claims() -> None:
    assert resolve_user_id(_token({"userId": "bob"})) == "bob"
    assert resolve_user_id(_token({"user_id": 42})) == "42"


def test_resolve_user_id_rejects_bad_tokens() -> None:
    assert resolve_user_id(None) is None
    assert resolve_user_id("") is None
    assert resolve_user_id("garbage") is None
    assert resolve_user_id(_token({"sub": "alice"}, secret="wrong-secret")) is None
    assert resolve_user_id(_token({"name": "no user id"})) is None


def test_resolve_user_id_rejects_expired() -> None:
    expired = _token({"sub": "alice", "exp": int(time.time()) - 60})
    assert resolve_user_id(expired) is None


def test_resolve_user_id_checks_audience_when_configured() -> None:
    token = _token({"sub": "alice", "aud": "prompthub"})
    assert resolve_user_id(token, audience="prompthub") == "alice"
    assert resolve_user_id(token, audience="other-app") is None


def test_extract_bearer_token() -> None:
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("bearer abc") == "abc"
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token("Bearer") is None
    assert extract_bearer_token(None) is None


def test_prompt_update_changes_only_sent_fields() -> None:
    update = PromptUpdate.model_validate({"title": "New", "isFeatured": False, "content": None})
    assert update.changes() == {"title": "New", "is_featured": False}
