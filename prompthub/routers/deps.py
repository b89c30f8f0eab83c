from __future__ import annotations

from fastapi import Header, HTTPException, Request

from prompthub.config import settings
from prompthub.llm_services.openai_service import OpenAiService
from prompthub.services.prompt_ai_service import PromptAiService
from prompthub.storage.storage import Storage
from prompthub.utils.audit_logger import log_suspicious_access
from prompthub.utils.jwtutils import extract_bearer_token, resolve_user_id


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_ai_service(request: Request) -> PromptAiService:
    service: PromptAiService | None = request.app.state.ai_service
    if service is None:
        if not settings.openai_api_key:
            raise HTTPException(status_code=503, detail="OPENAI_API_KEY not configured")
        service = PromptAiService(OpenAiService())
        request.app.state.ai_service = service
    return service


async def get_current_user_id(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """Resolve the caller from a Bearer JWT; 401 when there is none or it is invalid."""
    token = extract_bearer_token(authorization)
    user_id = resolve_user_id(token)
    if not user_id:
        if token:
            log_suspicious_access("invalid_bearer_token", request)
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id
