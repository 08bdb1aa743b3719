from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import httpx
import pytest


class RecordingHandler:
    """httpx.MockTransport handler that serves a fixed body and records requests."""

    def __init__(
        self,
        body: Any = None,
        status_code: int = 200,
        delay: float = 0.0,
        content: Optional[bytes] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.delay = delay
        self.content = content
        self.error = error
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def serve():
    """Factory: ``serve(body)`` → RecordingHandler (use ``.transport``)."""
    return RecordingHandler


# ══════════════════════════════════════════════════════════════════════════════
# Provider payloads
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def openai_payload() -> dict[str, Any]:
    return {
        "object": "list",
        "data": [
            {"id": "gpt-4o", "object": "model", "owned_by": "system"},
            {"id": "text-embedding-3-small", "object": "model", "owned_by": "system"},
            {"id": "gpt-4-0314", "object": "model", "owned_by": "openai"},
            {"id": "gpt-5", "object": "model", "owned_by": "system"},
            {"id": "gpt-4o-mini", "object": "model", "owned_by": "system"},
            {"id": "dall-e-3", "object": "model", "owned_by": "system"},
            {"id": "chatgpt-4o-latest", "object": "model", "owned_by": "system"},
            {"id": "gpt-3.5-turbo", "object": "model", "owned_by": "openai"},
        ],
    }


@pytest.fixture
def google_payload() -> dict[str, Any]:
    return {
        "models": [
            {
                "name": "models/gemini-2.5-pro",
                "displayName": "Gemini 2.5 Pro",
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": "models/gemini-3-pro-preview",
                "supportedGenerationMethods": ["generateContent"],
            },
            {
                "name": "models/text-embedding-004",
                "supportedGenerationMethods": ["embedContent"],
            },
            {
                "name": "models/gemma-3-27b-it",
                "supportedGenerationMethods": ["generateContent"],
            },
            {"name": "models/gemini-exp-1206"},
            {"name": "models/aqa", "supportedGenerationMethods": ["generateAnswer"]},
            {
                "name": "models/learnlm-2.0-flash-experimental",
                "supportedGenerationMethods": ["generateContent"],
            },
        ],
        "nextPageToken": "",
    }


@pytest.fixture
def openrouter_payload() -> dict[str, Any]:
    return {
        "data": [
            {
                "id": "anthropic/claude-sonnet-4",
                "context_length": 200000,
                "supported_parameters": ["tools", "tool_choice", "max_tokens"],
                "architecture": {
                    "input_modalities": ["text", "image"],
                    "output_modalities": ["text"],
                },
            },
            {
                "id": "openai/gpt-4o-mini",
                "supported_parameters": ["tools", "tool_choice"],
                "architecture": {"input_modalities": ["text", "image"]},
            },
            {
                "id": "meta-llama/llama-3.1-8b-instruct",
                "supported_parameters": ["max_tokens", "temperature"],
            },
            {
                "id": "openai/gpt-image-1",
                "architecture": {
                    "input_modalities": ["image"],
                    "output_modalities": ["image"],
                },
            },
            {
                "id": "mistralai/mistral-large-2411",
                "supported_parameters": ["tools", "tool_choice"],
            },
            {"id": "deepseek/deepseek-chat"},
        ]
    }


@pytest.fixture
def mistral_payload() -> dict[str, Any]:
    return {
        "object": "list",
        "data": [
            {
                "id": "mistral-large-latest",
                "capabilities": {
                    "completion_chat": True,
                    "function_calling": True,
                    "vision": False,
                },
            },
            {
                "id": "pixtral-large-latest",
                "capabilities": {"completion_chat": True, "vision": True},
            },
            {
                "id": "mistral-embed",
                "capabilities": {"completion_chat": False, "vision": False},
            },
            {
                "id": "mistral-large-2411",
                "capabilities": {"completion_chat": True, "vision": False},
            },
            {
                "id": "codestral-latest",
                "capabilities": {"completion_chat": True, "vision": False},
            },
        ],
    }


@pytest.fixture
def anthropic_payload() -> dict[str, Any]:
    return {
        "data": [
            {
                "type": "model",
                "id": "claude-sonnet-4-20250514",
                "display_name": "Claude Sonnet 4",
                "created_at": "2025-05-22T00:00:00Z",
            },
            {
                "type": "model",
                "id": "claude-opus-4-1",
                "display_name": "Claude Opus 4.1",
                "created_at": "2025-08-05T00:00:00Z",
            },
            {
                "type": "model",
                "id": "claude-2.1",
                "display_name": "Claude 2.1",
                "created_at": "2023-11-21T00:00:00Z",
            },
        ],
        "has_more": False,
        "first_id": "claude-sonnet-4-20250514",
        "last_id": "claude-2.1",
    }


@pytest.fixture
def payloads(
    openai_payload,
    google_payload,
    openrouter_payload,
    mistral_payload,
    anthropic_payload,
) -> dict[str, dict[str, Any]]:
    """provider id → a valid sample body for that provider."""
    return {
        "openai": openai_payload,
        "google": google_payload,
        "openrouter": openrouter_payload,
        "mistral": mistral_payload,
        "anthropic": anthropic_payload,
        "generic": openai_payload,
    }
