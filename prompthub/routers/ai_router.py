# No postponed annotations here: FastAPI resolves them against the globals of
# slowapi's wrapper, where the request and body types are not defined.

from fastapi import APIRouter, Depends, HTTPException, Request

from prompthub.config import settings
from prompthub.dto.req.ai_req import ChatPromptBuilderReq, GeneratePromptReq, RefinePromptReq, SuggestImprovementsReq
from prompthub.dto.res.ai_res import ChatBuilderTurn, GeneratedPrompt, RefinedPrompt, Suggestions
from prompthub.routers.deps import get_ai_service
from prompthub.services.prompt_ai_service import AiGenerationError, PromptAiService
from prompthub.utils.rate_limiter import limiter

router = APIRouter()


@router.post("/generate-prompt")
@limiter.limit(settings.rate_limit_ai)
async def generate_prompt(
    request: Request,
    body: GeneratePromptReq,
    ai: PromptAiService = Depends(get_ai_service),
) -> GeneratedPrompt:
    try:
        return await ai.generate_prompt(body)
    except AiGenerationError as e:
        raise HTTPException(status_code=500, detail="Failed to generate prompt") from e


@router.post("/refine-prompt")
@limiter.limit(settings.rate_limit_ai)
async def refine_prompt(
    request: Request,
    body: RefinePromptReq,
    ai: PromptAiService = Depends(get_ai_service),
) -> RefinedPrompt:
    try:
        return await ai.refine_prompt(body)
    except AiGenerationError as e:
        raise HTTPException(status_code=500, detail="Failed to refine prompt") from e


@router.post("/suggest-improvements")
@limiter.limit(settings.rate_limit_ai)
async def suggest_improvements(
    request: Request,
    body: SuggestImprovementsReq,
    ai: PromptAiService = Depends(get_ai_service),
) -> Suggestions:
    return Suggestions(suggestions=await ai.suggest_improvements(body.prompt))


@router.post("/chat-prompt-builder")
@limiter.limit(settings.rate_limit_ai)
async def chat_prompt_builder(
    request: Request,
    body: ChatPromptBuilderReq,
    ai: PromptAiService = Depends(get_ai_service),
) -> ChatBuilderTurn:
    return await ai.chat_prompt_builder(body.messages)
