"""Gemini REST implementation of the text generation contract."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any
from urllib import error, request

from article_workflow.config.settings import ProviderConfig, Settings
from article_workflow.errors import ConfigurationError, GenerationError
from article_workflow.tools.base import GenerationResult

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """Call ``models/{model}:generateContent``, optionally with Google Search grounding."""

    def __init__(
        self,
        config: ProviderConfig,
        *,
        model: str,
        search_grounding: bool = False,
    ) -> None:
        if not config.api_key:
            raise ConfigurationError("GOOGLE_API_KEY is missing")
        self.config = config
        self.model = model
        self.search_grounding = search_grounding

    async def generate(self, prompt: str) -> GenerationResult:
        return await asyncio.to_thread(self._generate_sync, prompt)

    def _generate_sync(self, prompt: str) -> GenerationResult:
        response_json = self._request_with_retry(self._request_body(prompt))
        return self._parse_response(response_json)

    def _request_body(self, prompt: str) -> dict[str, Any]:
        body: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if self.search_grounding:
            body["tools"] = [{"google_search": {}}]
        return body

    def _request_with_retry(self, request_body: dict[str, Any]) -> dict[str, Any]:
        last_error: GenerationError | None = None
        attempts = self.config.max_retries + 1
        for attempt in range(attempts):
            try:
                return self._request_once(request_body)
            except GenerationError as exc:
                last_error = exc
                logger.warning(
                    "Gemini request failed attempt=%d/%d model=%s reason=%s",
                    attempt + 1,
                    attempts,
                    self.model,
                    exc,
                )
                if attempt < attempts - 1 and self.config.backoff_s > 0:
                    time.sleep(self.config.backoff_s)

        if last_error is None:
            raise GenerationError("Gemini request failed", model=self.model)
        raise last_error

    def _request_once(self, request_body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.config.base_url.rstrip('/')}/models/{self.model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key,
            **self.config.headers,
        }
        req = request.Request(
            url=url,
            data=json.dumps(request_body).encode("utf-8"),
            method="POST",
            headers=headers,
        )
        try:
            with request.urlopen(req, timeout=self.config.timeout_s) as response:
                raw = response.read().decode("utf-8")
        except error.HTTPError as exc:
            message = exc.read().decode("utf-8", errors="replace")
            raise GenerationError(
                f"Gemini request failed with status {exc.code}: {message[:400]}",
                model=self.model,
            ) from exc
        except error.URLError as exc:
            raise GenerationError(f"Gemini request failed: {exc.reason}", model=self.model) from exc
        except TimeoutError as exc:
            raise GenerationError("Gemini request timed out", model=self.model) from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise GenerationError("Gemini returned non-JSON response", model=self.model) from exc

    def _parse_response(self, response_json: dict[str, Any]) -> GenerationResult:
        candidates = response_json.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = response_json.get("promptFeedback")
            raise GenerationError(
                f"Gemini response missing candidates (feedback={feedback})",
                model=self.model,
            )
        candidate = candidates[0] if isinstance(candidates[0], dict) else {}
        content = candidate.get("content")
        parts = content.get("parts", []) if isinstance(content, dict) else []
        text = "".join(
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )

        metadata: dict[str, Any] | None = None
        if self.search_grounding:
            metadata = {
                "google": {
                    "groundingMetadata": candidate.get("groundingMetadata"),
                    "safetyRatings": candidate.get("safetyRatings"),
                }
            }
        return GenerationResult(text=text, metadata=metadata)


def build_search_generator(config: ProviderConfig, settings: Settings) -> GeminiTextGenerator:
    return GeminiTextGenerator(config, model=settings.search_model, search_grounding=True)


def build_writer_generator(config: ProviderConfig, settings: Settings) -> GeminiTextGenerator:
    return GeminiTextGenerator(config, model=settings.writer_model)
