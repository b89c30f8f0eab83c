from __future__ import annotations

import json
import logging
from typing import Any

from prompthub.dto.req.ai_req import ChatMessage, GeneratePromptReq, RefinePromptReq
from prompthub.dto.res.ai_res import ChatBuilderTurn, GeneratedPrompt, RefinedPrompt
from prompthub.llm_services.llm_service import LlmService

logger = logging.getLogger(__name__)

CATEGORY_NAMES = "Writing, Coding, Marketing, Business, Education, Productivity, or Creative"

GENERATE_SYSTEM_PROMPT = f"""You are an expert prompt engineer who specializes in creating high-quality, effective prompts for various AI applications. Your task is to generate a comprehensive, reusable prompt based on the user's goal.

Create a detailed prompt that:
1. Is clear and specific in its instructions
2. Includes relevant context and constraints
3. Specifies the desired output format
4. Includes placeholders for customization (use [PLACEHOLDER] format)
5. Follows best practices for prompt engineering

Respond with JSON in this exact format:
{{
  "title": "Brief, descriptive title for the prompt",
  "description": "One-sentence description of what this prompt does",
  "content": "The full prompt text with [PLACEHOLDERS] for customization",
  "suggestedCategory": "Most appropriate category ({CATEGORY_NAMES})"
}}"""

REFINE_SYSTEM_PROMPT = """You are an expert prompt engineer who specializes in refining and improving prompts. Analyze the given prompt and improve it based on the specified goal.

Focus on:
1. Clarity and specificity
2. Better structure and organization
3. More effective instructions
4. Improved output formatting
5. Better use of placeholders and variables

Respond with JSON in this exact format:
{
  "refinedPrompt": "The improved version of the prompt",
  "improvements": ["List of specific improvements made", "Each improvement as a separate string"]
}"""

SUGGEST_SYSTEM_PROMPT = """You are an expert prompt engineer. Analyze the given prompt and suggest 3-5 specific improvements that could make it more effective.

Respond with JSON in this format:
{
  "suggestions": ["Suggestion 1", "Suggestion 2", "Suggestion 3"]
}"""

CHAT_BUILDER_SYSTEM_PROMPT = """You are an expert prompt engineer who helps users create perfect prompts through natural conversation. Your goal is to understand their needs through dialogue and eventually create a comprehensive, professional prompt.

Process:
1. Start with friendly greeting and ask about their goal
2. Ask follow-up questions to understand what they want to accomplish, the target audience, the tone, the output format and any constraints
3. When you have enough information (usually 3-4 exchanges), create the final prompt

Response format - ALWAYS respond with JSON:
For ongoing conversation:
{
  "message": "Your conversational response with follow-up question",
  "suggestions": ["Quick response option 1", "Quick response option 2", "Quick response option 3"],
  "isComplete": false
}

For final completion:
{
  "message": "Perfect! I've created your custom prompt based on our conversation.",
  "isComplete": true,
  "finalPrompt": "The complete, professional prompt with [PLACEHOLDERS]",
  "title": "Descriptive title for the prompt",
  "category": "Writing|Coding|Marketing|Business|Education|Creative|Productivity",
  "description": "Brief description of what this prompt does"
}

Keep the conversation natural, friendly, and focused. Ask one key question at a time."""

CHAT_BUILDER_GREETING = "I'd be happy to help you create a great prompt! What would you like to accomplish?"
CHAT_BUILDER_APOLOGY = "I apologize, but I'm having trouble processing that. Could you try rephrasing your request?"


class AiGenerationError(Exception):
    pass


def parse_json_object(raw: str) -> dict[str, Any]:
    """Best-effort parse; anything that is not a JSON object becomes {}."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("LLM returned malformed JSON; using defaults")
        return {}
    return data if isinstance(data, dict) else {}


def _str_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


class PromptAiService:
    def __init__(self, llm: LlmService) -> None:
        self._llm = llm

    async def _ask(self, system_prompt: str, messages: list[dict[str, Any]]) -> dict[str, Any]:
        raw = await self._llm.generate_json(system_prompt, messages)
        return parse_json_object(raw)

    async def generate_prompt(self, req: GeneratePromptReq) -> GeneratedPrompt:
        user_prompt = (
            f'Generate a prompt for this goal: "{req.goal}"\n\n'
            "Additional context:\n"
            f"- Category preference: {req.category or 'Not specified'}\n"
            f"- Target audience: {req.audience or 'General'}\n"
            f"- Desired tone: {req.tone or 'Professional'}\n"
            f"- Additional context: {req.additional_context or 'None'}\n\n"
            "Create a comprehensive, reusable prompt that achieves this goal effectively."
        )
        try:
            result = await self._ask(GENERATE_SYSTEM_PROMPT, [{"role": "user", "content": user_prompt}])
        except Exception as e:
            logger.error(f"Prompt generation failed: {e}")
            raise AiGenerationError(f"Failed to generate prompt: {e}") from e

        return GeneratedPrompt(
            title=_str_or(result.get("title"), "Generated Prompt"),
            description=_str_or(result.get("description"), "AI-generated prompt"),
            content=_str_or(result.get("content"), ""),
            suggested_category=_str_or(result.get("suggestedCategory"), "Writing"),
        )

    async def refine_prompt(self, req: RefinePromptReq) -> RefinedPrompt:
        user_prompt = (
            f"Original prompt:\n{req.original_prompt}\n\n"
            f"Refinement goal: {req.refinement_goal}\n\n"
            "Please refine this prompt to better achieve the stated goal."
        )
        try:
            result = await self._ask(REFINE_SYSTEM_PROMPT, [{"role": "user", "content": user_prompt}])
        except Exception as e:
            logger.error(f"Prompt refinement failed: {e}")
            raise AiGenerationError(f"Failed to refine prompt: {e}") from e

        return RefinedPrompt(
            refined_prompt=_str_or(result.get("refinedPrompt"), req.original_prompt),
            improvements=_str_list(result.get("improvements")),
        )

    async def suggest_improvements(self, prompt: str) -> list[str]:
        try:
            result = await self._ask(
                SUGGEST_SYSTEM_PROMPT,
                [{"role": "user", "content": f"Analyze this prompt and suggest improvements:\n\n{prompt}"}],
            )
        except Exception as e:
            logger.error(f"Failed to generate suggestions: {e}")
            return []
        return _str_list(result.get("suggestions"))

    async def chat_prompt_builder(self, messages: list[ChatMessage]) -> ChatBuilderTurn:
        try:
            result = await self._ask(
                CHAT_BUILDER_SYSTEM_PROMPT,
                [{"role": m.role, "content": m.content} for m in messages],
            )
        except Exception as e:
            logger.error(f"Failed to process chat: {e}")
            return ChatBuilderTurn(message=CHAT_BUILDER_APOLOGY, is_complete=False)

        suggestions = result.get("suggestions")
        return ChatBuilderTurn(
            message=_str_or(result.get("message"), CHAT_BUILDER_GREETING),
            suggestions=_str_list(suggestions) if suggestions is not None else None,
            is_complete=bool(result.get("isComplete", False)),
            final_prompt=_opt_str(result.get("finalPrompt")),
            title=_opt_str(result.get("title")),
            category=_opt_str(result.get("category")),
            description=_opt_str(result.get("description")),
        )
