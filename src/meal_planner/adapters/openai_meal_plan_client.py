"""OpenAI Responses API client for meal plan generation."""

import json
import logging
from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from meal_planner.errors import InternalError, ServiceUnavailableError
from meal_planner.services.generation import MealPlanProvider

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIMealPlanClient(MealPlanProvider):
    """Meal plan provider backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIMealPlanClient":
        """Create an OpenAI meal plan client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        )

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        system_prompt: str,
        user_prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": system_prompt,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": user_prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_plan",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except (openai.APITimeoutError, openai.RateLimitError) as exc:
            _logger.warning("OpenAI meal plan request unavailable: %s", exc)
            raise ServiceUnavailableError(
                "Meal plan provider is unavailable, please retry"
            ) from exc
        except openai.APIConnectionError as exc:
            _logger.warning("OpenAI meal plan connection failed: %s", exc)
            raise ServiceUnavailableError(
                "Could not reach the meal plan provider, please retry"
            ) from exc

        output_text = response.output_text
        if not output_text:
            raise InternalError(
                "Meal plan provider returned an empty response",
                violations=["response is empty"],
                retryable=True,
            )
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise InternalError(
                "Meal plan provider returned invalid JSON",
                violations=[f"response is not valid JSON: {exc.msg}"],
                retryable=True,
            ) from exc
