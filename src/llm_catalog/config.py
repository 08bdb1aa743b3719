"""
config.py — Centralised configuration for the model-catalog engine

Provider endpoints, auth styles, the shared request timeout and the naming
heuristics used by the classifier all live here.  Nothing deeper in the
stack hard-codes a provider quirk; adapters look them up in these tables.

The heuristic tables are plain data: editing them is the expected way to keep
up with providers renaming their model families.
"""

from __future__ import annotations

import os
import re
from typing import Any


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key, "").lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no"):
        return False
    return default


# One timeout for every provider; bounds the network step only (seconds).
REQUEST_TIMEOUT: float = 5.0


class Settings:
    """
    Simple settings object populated from environment variables.

    ``reload()`` re-reads the environment, e.g. after a .env file was loaded.
    """

    def __init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        # Network
        self.request_timeout: float = float(
            os.getenv("CATALOG_REQUEST_TIMEOUT", str(REQUEST_TIMEOUT))
        )

        # Logging
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # Optional HTTP surface
        self.host: str = os.getenv("CATALOG_HOST", "127.0.0.1")
        self.port: int = int(os.getenv("CATALOG_PORT", "7545"))
        self.debug: bool = _env_bool("DEBUG", False)


settings = Settings()


# ══════════════════════════════════════════════════════════════════════════════
# Provider catalogue
# ══════════════════════════════════════════════════════════════════════════════

# Every provider definition:
#   default_base_url — used when the caller does not supply one (None = must supply)
#   auth             — "bearer" | "google" | "anthropic"
#   label            — human readable name

PROVIDER_CATALOGUE: dict[str, dict[str, Any]] = {
    "openai": {
        "label": "OpenAI",
        "default_base_url": "https://api.openai.com/v1",
        "auth": "bearer",
    },
    "google": {
        "label": "Google Gemini",
        "default_base_url": "https://generativelanguage.googleapis.com/v1beta",
        "auth": "google",
    },
    "openrouter": {
        "label": "OpenRouter",
        "default_base_url": "https://openrouter.ai/api/v1",
        "auth": "bearer",
    },
    "mistral": {
        "label": "Mistral",
        "default_base_url": "https://api.mistral.ai/v1",
        "auth": "bearer",
    },
    "anthropic": {
        "label": "Anthropic",
        "default_base_url": "https://api.anthropic.com/v1",
        "auth": "anthropic",
    },
    # Any OpenAI-shaped server (vLLM, LM Studio, llama.cpp, …)
    "generic": {
        "label": "OpenAI-compatible endpoint",
        "default_base_url": None,
        "auth": "bearer",
    },
}

ANTHROPIC_API_VERSION = "2023-06-01"


# ══════════════════════════════════════════════════════════════════════════════
# Classification heuristics
# ══════════════════════════════════════════════════════════════════════════════

# Substrings of ids that belong to non-chat families (embeddings, speech,
# image/video generation, moderation, computer-use, …).
COMMON_IGNORE_KEYWORDS: tuple[str, ...] = (
    "embed",
    "sora",
    "tts",
    "whisper",
    "dall-e",
    "audio",
    "image",
    "computer",
    "robotics",
    "realtime",
    "moderation",
    "codex",
    "transcribe",
)

# Matched against the last "/" segment of the lower-cased id.
NON_CHAT_MODEL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^o\d"),
    re.compile(r"^gpt-4o-"),
    re.compile(r"^gpt-4\.1"),
    re.compile(r"^ft:"),
    re.compile(r"^gemini-2\.[05]"),
    re.compile(r"^gemma"),
    re.compile(r"^nano-banana"),
)

# Matched against the full lower-cased id.
OLD_MODEL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^gpt-3\.5"),
    re.compile(r"^gpt-4(?!o|\.)"),
    re.compile(r"^(davinci|babbage|curie|ada)(-|$)"),
    re.compile(r"^claude-(2|instant)"),
)

# -2024-05-13 anywhere, -20241022 or -0314 at the end.
DATE_SNAPSHOT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"-\d{4}-\d{2}-\d{2}"),
    re.compile(r"-\d{8}$"),
    re.compile(r"-\d{4}$"),
)

GOOGLE_MULTIMODAL_PATTERN: re.Pattern[str] = re.compile(r"gemini")
GOOGLE_CHAT_METHOD = "generateContent"

OPENROUTER_REQUIRED_TOOL_PARAMETERS: tuple[str, ...] = ("tools", "tool_choice")
