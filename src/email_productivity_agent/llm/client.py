"""Gemini client implementation.

This module provides a client for the Gemini ``generateContent`` REST
endpoint with per-attempt timeouts and linear-backoff retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import httpx
import structlog

from email_productivity_agent.config import Settings
from email_productivity_agent.exceptions import (
    ConfigurationError,
    LLMAPIError,
    LLMNetworkError,
    LLMResponseError,
    LLMTimeoutError,
)
from email_productivity_agent.llm.retry import FailureKind, Phase, RetryPolicy

logger = structlog.get_logger()

SleepFn = Callable[[float], Awaitable[None]]


class _AttemptFailed(Exception):
    def __init__(self, kind: FailureKind, error: Exception) -> None:
        self.kind = kind
        self.error = error
        super().__init__(str(error))


def _extract_text(data: Any) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


def _api_error_message(response: httpx.Response) -> str:
    """Prefer ``error.message`` from the JSON error body, else the raw text."""
    body = response.text
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"Gemini API error: {error['message']}"
    return f"Gemini API error ({response.status_code}): {body}"


class GeminiClient:
    """Gemini LLM client for AI inference.

    Each attempt is bounded by a timeout and cancelled on expiry. Timeouts and
    network failures are retried with linear backoff; error responses and
    malformed envelopes are not.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        """Initialize Gemini client.

        Args:
            settings: Application settings. If None, uses default settings.
            http_client: HTTP client to use. If None, one is created per call.
            sleep: Awaitable used for backoff pauses. Defaults to asyncio.sleep.
        """
        from email_productivity_agent.config import get_settings

        self.settings = settings or get_settings()
        self._http_client = http_client
        self._sleep = sleep or asyncio.sleep
        self.policy = RetryPolicy(
            max_attempts=self.settings.max_retries,
            base_delay=self.settings.retry_base_delay,
        )
        logger.info(
            "gemini_client_initialized",
            model=self.settings.gemini_model,
            ai_enabled=self.settings.ai_enabled,
        )

    @property
    def endpoint(self) -> str:
        base = self.settings.gemini_api_url.rstrip("/")
        return f"{base}/models/{self.settings.gemini_model}:generateContent"

    def build_payload(self, user_message: str, system_message: Optional[str] = None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": user_message}]}],
        }
        if system_message:
            payload["system_instruction"] = {"parts": [{"text": system_message}]}
        return payload

    async def send(
        self,
        user_message: str,
        system_message: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> str:
        """Send a prompt to Gemini and return the generated text.

        Args:
            user_message: The user turn.
            system_message: Optional system instruction.
            timeout: Per-attempt timeout in seconds. Defaults to settings.llm_timeout.
            max_attempts: Override for the number of attempts.

        Returns:
            The generated text.

        Raises:
            ConfigurationError: If no API key is configured.
            LLMTimeoutError: If every attempt timed out.
            LLMNetworkError: If every attempt failed at the transport level.
            LLMAPIError: If Gemini answered with a non-2xx status.
            LLMResponseError: If a 2xx response carried no extractable text.
        """
        api_key = self.settings.gemini_api_key
        if not api_key:
            raise ConfigurationError(
                "Gemini API key not configured. Please set EMAIL_AGENT_GEMINI_API_KEY."
            )

        timeout = timeout if timeout is not None else self.settings.llm_timeout
        policy = self.policy
        if max_attempts is not None:
            policy = RetryPolicy(max_attempts=max_attempts, base_delay=policy.base_delay)

        payload = self.build_payload(user_message, system_message)
        state = policy.start()

        while True:
            try:
                text = await self._attempt(payload, api_key, timeout)
            except _AttemptFailed as failure:
                state = policy.fail(state, failure.kind)
                if state.phase is Phase.FAILED:
                    if failure.kind is FailureKind.PERMANENT:
                        logger.error("gemini_request_failed", error=str(failure.error))
                        raise failure.error
                    raise self._final_error(failure, timeout) from failure.error

                delay = policy.backoff_delay(state)
                logger.warning(
                    "gemini_attempt_failed",
                    attempt=state.attempt,
                    max_attempts=policy.max_attempts,
                    kind=failure.kind.value,
                    delay=delay,
                    error=str(failure.error),
                )
                await self._sleep(delay)
                state = policy.resume(state)
                continue

            state = policy.succeed(state)
            logger.debug("gemini_request_succeeded", attempt=state.attempt, length=len(text))
            return text

    async def probe(self, timeout: Optional[float] = None) -> str:
        """Single-attempt connectivity check with a short timeout."""
        return await self.send(
            "test",
            timeout=timeout if timeout is not None else self.settings.llm_probe_timeout,
            max_attempts=1,
        )

    async def _attempt(self, payload: dict[str, Any], api_key: str, timeout: float) -> str:
        try:
            response = await asyncio.wait_for(self._post(payload, api_key), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise _AttemptFailed(FailureKind.TIMEOUT, exc) from exc
        except httpx.TransportError as exc:
            raise _AttemptFailed(FailureKind.NETWORK, exc) from exc
        except httpx.HTTPError as exc:
            raise _AttemptFailed(
                FailureKind.PERMANENT,
                LLMResponseError(f"Invalid response from Gemini API: {exc}"),
            ) from exc

        if not response.is_success:
            raise _AttemptFailed(
                FailureKind.PERMANENT,
                LLMAPIError(_api_error_message(response), status_code=response.status_code),
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        text = _extract_text(data)
        if text is None:
            raise _AttemptFailed(
                FailureKind.PERMANENT,
                LLMResponseError("Invalid response format from Gemini API"),
            )
        return text

    async def _post(self, payload: dict[str, Any], api_key: str) -> httpx.Response:
        params = {"key": api_key}
        if self._http_client is not None:
            return await self._http_client.post(self.endpoint, params=params, json=payload)
        # asyncio.wait_for bounds the attempt, so httpx itself must not time out first.
        async with httpx.AsyncClient(timeout=None) as client:
            return await client.post(self.endpoint, params=params, json=payload)

    def _final_error(self, failure: _AttemptFailed, timeout: float) -> Exception:
        if failure.kind is FailureKind.TIMEOUT:
            logger.error("gemini_request_timed_out", timeout=timeout)
            return LLMTimeoutError(
                f"Request timed out after {timeout:g} seconds. "
                "Please check your internet connection and try again."
            )
        logger.error("gemini_network_error", error=str(failure.error))
        return LLMNetworkError(
            "Network error. Please check your internet connection and try again."
        )
