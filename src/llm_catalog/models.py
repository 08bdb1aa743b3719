"""
models.py — Catalog types and provider response schemas.

Two layers:
  1. Catalog types returned to callers (IgnoreReason, ModelMetadata, ListModelsResult)
  2. Raw provider schemas (pydantic) used to validate each /models response
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


# ══════════════════════════════════════════════════════════════════════════════
# Enumerations
# ══════════════════════════════════════════════════════════════════════════════


class ProviderId(str, Enum):
    OPENAI     = "openai"
    GOOGLE     = "google"
    OPENROUTER = "openrouter"
    MISTRAL    = "mistral"
    ANTHROPIC  = "anthropic"
    GENERIC    = "generic"     # any OpenAI-shaped server


class IgnoreReason(str, Enum):
    COMMON_KEYWORD = "common_keyword"   # embedding / speech / image families
    NOT_CHAT_MODEL = "not_chat_model"   # fails the chat-name heuristic
    NO_COMPLETION  = "no_completion"    # provider says no chat completion
    OLD_MODEL      = "old_model"        # superseded generation
    DATE_SNAPSHOT  = "date_snapshot"    # pinned duplicate of an alias
    NO_TEXT_INPUT  = "no_text_input"
    NO_TOOL        = "no_tool"


class InputModality(str, Enum):
    TEXT  = "text"
    IMAGE = "image"


# ══════════════════════════════════════════════════════════════════════════════
# Catalog types
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class ModelMetadata:
    """Capability metadata derived for one model."""
    input_modalities: List[InputModality] = field(
        default_factory=lambda: [InputModality.TEXT]
    )

    @classmethod
    def from_modalities(cls, modalities: Iterable[InputModality]) -> "ModelMetadata":
        """Build metadata keeping first-seen order; empty input means text only."""
        ordered: List[InputModality] = []
        for modality in modalities:
            if modality not in ordered:
                ordered.append(modality)
        return cls(input_modalities=ordered or [InputModality.TEXT])

    def to_dict(self) -> Dict[str, Any]:
        return {"input_modalities": [m.value for m in self.input_modalities]}


@dataclass(frozen=True)
class ListModelsResult:
    """Catalog snapshot for one provider.

    ``included`` keeps the provider's order.  Every raw id is either in
    ``included`` or a key of ``ignored``, and ``metadata`` covers both.
    """
    included: List[str] = field(default_factory=list)
    ignored: Dict[str, List[IgnoreReason]] = field(default_factory=dict)
    metadata: Dict[str, ModelMetadata] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.included and not self.ignored and not self.metadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "included": list(self.included),
            "ignored": {
                mid: [r.value for r in reasons] for mid, reasons in self.ignored.items()
            },
            "metadata": {mid: meta.to_dict() for mid, meta in self.metadata.items()},
        }


def default_result() -> ListModelsResult:
    """The empty catalog returned whenever anything in the pipeline fails."""
    return ListModelsResult()


# ══════════════════════════════════════════════════════════════════════════════
# Provider response schemas
# ══════════════════════════════════════════════════════════════════════════════

# Scalars are strict (no "1" -> 1 coercion); unknown keys are ignored so
# providers can add fields without breaking discovery.


class GoogleModel(BaseModel):
    name: StrictStr
    supported_generation_methods: Optional[List[StrictStr]] = Field(
        None, alias="supportedGenerationMethods"
    )


class GoogleModelList(BaseModel):
    """GET {base}/models on generativelanguage.googleapis.com"""
    models: List[GoogleModel]


class OpenAIModel(BaseModel):
    id: StrictStr


class OpenAIModelList(BaseModel):
    """OpenAI and every OpenAI-shaped server."""
    data: List[OpenAIModel]


class OpenRouterArchitecture(BaseModel):
    input_modalities: Optional[List[StrictStr]] = None
    output_modalities: Optional[List[StrictStr]] = None


class OpenRouterModel(BaseModel):
    id: StrictStr
    supported_parameters: Optional[List[StrictStr]] = None
    architecture: Optional[OpenRouterArchitecture] = None


class OpenRouterModelList(BaseModel):
    data: List[OpenRouterModel]


class MistralCapabilities(BaseModel):
    completion_chat: StrictBool
    vision: StrictBool


class MistralModel(BaseModel):
    id: StrictStr
    capabilities: MistralCapabilities


class MistralModelList(BaseModel):
    data: List[MistralModel]


class AnthropicModel(BaseModel):
    type: StrictStr
    id: StrictStr
    display_name: StrictStr
    created_at: StrictStr


class AnthropicModelList(BaseModel):
    data: List[AnthropicModel]
    has_more: StrictBool
    first_id: StrictStr
    last_id: StrictStr
