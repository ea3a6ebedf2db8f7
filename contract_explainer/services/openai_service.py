"""
OpenAI Service
Sends an instruction pair to the chat completions API and returns the raw
text of the reply. One attempt per call: failures propagate immediately.
"""

import logging
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from contract_explainer.core.exceptions import AnalysisServiceError
from contract_explainer.schemas.openai import AnalysisRequest, InstructionPair, OpenAIErrorType

logger = logging.getLogger(__name__)

# Sampling policy shared by every call site
ANALYSIS_MAX_TOKENS = 800
ANALYSIS_TEMPERATURE = 0.3


class OpenAIService:
    """
    Thin async client for the generative-text service.

    The SDK's own retries are disabled so each request reaches the API
    exactly once.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        client: Optional[AsyncOpenAI] = None
    ):
        """
        Initialize OpenAI service.

        Args:
            api_key: OpenAI API key
            model: Chat model to use
            timeout: Request timeout in seconds
            client: Preconfigured client (takes precedence over api_key)
        """
        self.model = model
        if client is not None:
            self.client = client
            return

        self.api_key = api_key
        if not self.api_key:
            raise ValueError("OpenAI API key is required. Set OPENAI_API_KEY in environment variables.")
        self.client = AsyncOpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)

    def _parse_error(self, error: Exception) -> AnalysisServiceError:
        """
        Classify an exception raised by the OpenAI SDK.

        Args:
            error: Exception from OpenAI API

        Returns:
            AnalysisServiceError with the matching error type
        """
        if isinstance(error, openai.RateLimitError):
            return AnalysisServiceError(f"Rate limit exceeded: {error}", OpenAIErrorType.RATE_LIMIT)
        if isinstance(error, openai.AuthenticationError):
            return AnalysisServiceError(f"Authentication failed: {error}", OpenAIErrorType.AUTHENTICATION)
        if isinstance(error, openai.PermissionDeniedError):
            return AnalysisServiceError(f"Permission denied: {error}", OpenAIErrorType.PERMISSION)
        if isinstance(error, openai.BadRequestError):
            error_str = str(error).lower()
            if "token" in error_str and ("limit" in error_str or "maximum" in error_str):
                return AnalysisServiceError(f"Token limit exceeded: {error}", OpenAIErrorType.TOKEN_LIMIT)
            return AnalysisServiceError(f"Invalid request: {error}", OpenAIErrorType.INVALID_REQUEST)
        if isinstance(error, openai.InternalServerError):
            return AnalysisServiceError(f"OpenAI server error: {error}", OpenAIErrorType.SERVER_ERROR)
        if isinstance(error, (openai.APIConnectionError, httpx.TimeoutException, httpx.NetworkError)):
            return AnalysisServiceError(f"Network error: {error}", OpenAIErrorType.NETWORK)
        return AnalysisServiceError(f"Unknown error: {error}", OpenAIErrorType.UNKNOWN)

    async def complete(
        self,
        instructions: InstructionPair,
        max_tokens: int = ANALYSIS_MAX_TOKENS,
        temperature: float = ANALYSIS_TEMPERATURE
    ) -> str:
        """
        Run one chat completion and return the reply text.

        Args:
            instructions: System and user instructions
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            Raw reply text, not yet validated in any way

        Raises:
            AnalysisServiceError: If the call fails or the reply is empty
        """
        request = AnalysisRequest(
            system_instruction=instructions.system,
            user_instruction=instructions.user,
            max_output_tokens=max_tokens,
            temperature=temperature,
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=request.to_messages(),
                max_tokens=request.max_output_tokens,
                temperature=request.temperature
            )
        except (openai.OpenAIError, httpx.HTTPError) as e:
            error = self._parse_error(e)
            logger.error(f"Chat completion failed ({error.error_type.value}): {error.message}")
            raise error from e

        if not completion.choices:
            raise AnalysisServiceError("OpenAI returned no choices", OpenAIErrorType.EMPTY_RESPONSE)
        content = completion.choices[0].message.content
        if not content:
            raise AnalysisServiceError("OpenAI returned an empty response", OpenAIErrorType.EMPTY_RESPONSE)

        if getattr(completion, "usage", None):
            logger.info(f"Chat completion created successfully (tokens: {completion.usage.total_tokens})")
        return content
