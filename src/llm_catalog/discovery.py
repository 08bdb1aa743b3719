"""
discovery.py — Per-provider model discovery for the catalog engine.

Responsibilities:
  • Fetch a provider's /models list with that provider's auth headers
  • Validate the body against the provider's documented response shape
  • Classify every record with shared and provider-specific ignore rules
  • Derive input-modality metadata from whatever hints the provider exposes
  • Degrade to the empty catalog on any failure, never raising to callers

Each provider is a ``ProviderAdapter`` subclass registered by provider id.

Dependencies: httpx (via fetcher), pydantic (response schemas)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from llm_catalog.classify import (
    Classifier,
    Rule,
    id_rule,
    is_date_snapshot,
    is_non_chat_model,
    is_old_model,
    should_ignore_common_keywords,
)
from llm_catalog.config import (
    ANTHROPIC_API_VERSION,
    GOOGLE_CHAT_METHOD,
    GOOGLE_MULTIMODAL_PATTERN,
    OPENROUTER_REQUIRED_TOOL_PARAMETERS,
    PROVIDER_CATALOGUE,
)
from llm_catalog.errors import CatalogError, DecodeError, UnknownProviderError
from llm_catalog.fetcher import fetch_json
from llm_catalog.models import (
    AnthropicModel,
    AnthropicModelList,
    GoogleModel,
    GoogleModelList,
    IgnoreReason,
    InputModality,
    ListModelsResult,
    MistralModel,
    MistralModelList,
    OpenAIModel,
    OpenAIModelList,
    OpenRouterModel,
    OpenRouterModelList,
    ProviderId,
    default_result,
)
from llm_catalog.partition import build_result

logger = logging.getLogger(__name__)

R = TypeVar("R")

_TEXT_ONLY: List[InputModality] = [InputModality.TEXT]
_TEXT_AND_IMAGE: List[InputModality] = [InputModality.TEXT, InputModality.IMAGE]


# ══════════════════════════════════════════════════════════════════════════════
# ProviderAdapter: the strategy every provider implements
# ══════════════════════════════════════════════════════════════════════════════


class ProviderAdapter(Generic[R]):
    """
    Fetch → decode → classify → extract-metadata for one provider.

    Subclasses set ``provider`` and ``schema`` and implement ``records``,
    ``model_id`` and ``rules``; ``headers`` and ``input_modalities`` have
    bearer-token and text-only defaults.

    Usage::

        result = await OpenAIAdapter().list_models("https://api.openai.com/v1", key)
        result.included   # ["gpt-4o", ...]
    """

    provider: ProviderId
    schema: Type[BaseModel]

    def __init__(self) -> None:
        self.classifier: Classifier[R] = Classifier(self.rules())

    # ── Provider hooks ─────────────────────────────────────────────────────────

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    def records(self, payload: Any) -> Sequence[R]:
        raise NotImplementedError

    def model_id(self, record: R) -> str:
        raise NotImplementedError

    def rules(self) -> List[Rule[R]]:
        raise NotImplementedError

    def input_modalities(self, record: R) -> List[InputModality]:
        return _TEXT_ONLY

    # ── Pipeline steps ─────────────────────────────────────────────────────────

    def decode(self, data: Any) -> Sequence[R]:
        """Validate a raw JSON value; raises DecodeError on any mismatch."""
        try:
            payload = self.schema.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                f"{self.provider.value} response does not match {self.schema.__name__}: "
                f"{exc.error_count()} error(s)"
            ) from exc
        return self.records(payload)

    def catalog(self, records: Sequence[R]) -> ListModelsResult:
        return build_result(records, self.classifier, self.model_id, self.input_modalities)

    async def list_models(
        self,
        base_url: Optional[str],
        api_key: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> ListModelsResult:
        """Return the provider's catalog, or the empty catalog on any failure."""
        if not base_url:
            logger.debug("No base URL for %s — skipping discovery", self.provider.value)
            return default_result()

        url = f"{base_url.rstrip('/')}/models"
        try:
            data = await fetch_json(url, self.headers(api_key), timeout=timeout, transport=transport)
            result = self.catalog(self.decode(data))
        except CatalogError as exc:
            logger.warning(
                "Discovery failed for %s (%s) — returning empty catalog: %s",
                self.provider.value,
                exc.error_code,
                exc,
            )
            return default_result()
        except Exception:
            logger.exception(
                "Unexpected error during discovery for %s — returning empty catalog",
                self.provider.value,
            )
            return default_result()

        logger.info(
            "Discovered %d models from %s (%d included, %d ignored)",
            len(result.metadata),
            self.provider.value,
            len(result.included),
            len(result.ignored),
        )
        return result


# ══════════════════════════════════════════════════════════════════════════════
# Providers
# ══════════════════════════════════════════════════════════════════════════════


class GoogleAdapter(ProviderAdapter[GoogleModel]):
    """generativelanguage.googleapis.com — names look like ``models/gemini-1.5-flash``."""

    provider = ProviderId.GOOGLE
    schema = GoogleModelList

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"x-goog-api-key": api_key}

    def records(self, payload: GoogleModelList) -> Sequence[GoogleModel]:
        return payload.models

    def model_id(self, record: GoogleModel) -> str:
        return record.name[len("models/"):] if record.name.startswith("models/") else record.name

    @staticmethod
    def supports_generation(record: GoogleModel) -> bool:
        methods = record.supported_generation_methods
        return methods is None or GOOGLE_CHAT_METHOD in methods

    def rules(self) -> List[Rule[GoogleModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, lambda m: m.name),
            id_rule(IgnoreReason.NOT_CHAT_MODEL, is_non_chat_model, self.model_id),
            Rule(IgnoreReason.NO_COMPLETION, lambda m: not self.supports_generation(m)),
            id_rule(IgnoreReason.DATE_SNAPSHOT, is_date_snapshot, self.model_id),
        ]

    def input_modalities(self, record: GoogleModel) -> List[InputModality]:
        if GOOGLE_MULTIMODAL_PATTERN.search(self.model_id(record).lower()):
            return _TEXT_AND_IMAGE
        return _TEXT_ONLY


class OpenAIAdapter(ProviderAdapter[OpenAIModel]):
    provider = ProviderId.OPENAI
    schema = OpenAIModelList

    def records(self, payload: OpenAIModelList) -> Sequence[OpenAIModel]:
        return payload.data

    def model_id(self, record: OpenAIModel) -> str:
        return record.id

    def rules(self) -> List[Rule[OpenAIModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, self.model_id),
            id_rule(IgnoreReason.NOT_CHAT_MODEL, is_non_chat_model, self.model_id),
            id_rule(IgnoreReason.OLD_MODEL, is_old_model, self.model_id),
            id_rule(IgnoreReason.DATE_SNAPSHOT, is_date_snapshot, self.model_id),
        ]

    def input_modalities(self, record: OpenAIModel) -> List[InputModality]:
        return _TEXT_AND_IMAGE


class GenericAdapter(OpenAIAdapter):
    """Third-party OpenAI-shaped servers.

    Same schema as OpenAI but only the keyword and chat-name rules apply:
    these servers do not follow OpenAI's generation or snapshot naming.
    """

    provider = ProviderId.GENERIC

    def rules(self) -> List[Rule[OpenAIModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, self.model_id),
            id_rule(IgnoreReason.NOT_CHAT_MODEL, is_non_chat_model, self.model_id),
        ]

    def input_modalities(self, record: OpenAIModel) -> List[InputModality]:
        return _TEXT_ONLY


class OpenRouterAdapter(ProviderAdapter[OpenRouterModel]):
    """OpenRouter /api/v1/models — each entry may carry architecture and parameters."""

    provider = ProviderId.OPENROUTER
    schema = OpenRouterModelList

    def records(self, payload: OpenRouterModelList) -> Sequence[OpenRouterModel]:
        return payload.data

    def model_id(self, record: OpenRouterModel) -> str:
        return record.id

    @staticmethod
    def supports_text_input(record: OpenRouterModel) -> bool:
        arch = record.architecture
        if arch is None or arch.input_modalities is None:
            return True
        return "text" in arch.input_modalities

    @staticmethod
    def supports_tool_use(record: OpenRouterModel) -> bool:
        params = record.supported_parameters
        if params is None:
            return True
        return all(p in params for p in OPENROUTER_REQUIRED_TOOL_PARAMETERS)

    def rules(self) -> List[Rule[OpenRouterModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, self.model_id),
            id_rule(IgnoreReason.NOT_CHAT_MODEL, is_non_chat_model, self.model_id),
            Rule(IgnoreReason.NO_TEXT_INPUT, lambda m: not self.supports_text_input(m)),
            Rule(IgnoreReason.NO_TOOL, lambda m: not self.supports_tool_use(m)),
            id_rule(IgnoreReason.OLD_MODEL, is_old_model, self.model_id),
            id_rule(IgnoreReason.DATE_SNAPSHOT, is_date_snapshot, self.model_id),
        ]

    def input_modalities(self, record: OpenRouterModel) -> List[InputModality]:
        arch = record.architecture
        declared = (arch.input_modalities if arch else None) or []
        # An empty result falls back to text-only in ModelMetadata.
        return [m for m in (InputModality.TEXT, InputModality.IMAGE) if m.value in declared]


class MistralAdapter(ProviderAdapter[MistralModel]):
    provider = ProviderId.MISTRAL
    schema = MistralModelList

    def records(self, payload: MistralModelList) -> Sequence[MistralModel]:
        return payload.data

    def model_id(self, record: MistralModel) -> str:
        return record.id

    def rules(self) -> List[Rule[MistralModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, self.model_id),
            Rule(IgnoreReason.NO_COMPLETION, lambda m: not m.capabilities.completion_chat),
            id_rule(IgnoreReason.DATE_SNAPSHOT, is_date_snapshot, self.model_id),
        ]

    def input_modalities(self, record: MistralModel) -> List[InputModality]:
        return _TEXT_AND_IMAGE if record.capabilities.vision else _TEXT_ONLY


class AnthropicAdapter(ProviderAdapter[AnthropicModel]):
    provider = ProviderId.ANTHROPIC
    schema = AnthropicModelList

    def headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "anthropic-dangerous-direct-browser-access": "true",
        }

    def records(self, payload: AnthropicModelList) -> Sequence[AnthropicModel]:
        return payload.data

    def model_id(self, record: AnthropicModel) -> str:
        return record.id

    def rules(self) -> List[Rule[AnthropicModel]]:
        return [
            id_rule(IgnoreReason.COMMON_KEYWORD, should_ignore_common_keywords, self.model_id),
            id_rule(IgnoreReason.OLD_MODEL, is_old_model, self.model_id),
            id_rule(IgnoreReason.DATE_SNAPSHOT, is_date_snapshot, self.model_id),
        ]

    def input_modalities(self, record: AnthropicModel) -> List[InputModality]:
        return _TEXT_AND_IMAGE


# Dispatcher: provider id → adapter
_ADAPTERS: Dict[str, ProviderAdapter[Any]] = {
    adapter.provider.value: adapter
    for adapter in (
        OpenAIAdapter(),
        GoogleAdapter(),
        OpenRouterAdapter(),
        MistralAdapter(),
        AnthropicAdapter(),
        GenericAdapter(),
    )
}


# ══════════════════════════════════════════════════════════════════════════════
# Public interface
# ══════════════════════════════════════════════════════════════════════════════


def get_adapter(provider: Union[str, ProviderId]) -> ProviderAdapter[Any]:
    key = provider.value if isinstance(provider, ProviderId) else provider
    try:
        return _ADAPTERS[key]
    except KeyError:
        raise UnknownProviderError(key) from None


def supported_providers() -> List[str]:
    return list(_ADAPTERS)


async def list_models(
    provider: Union[str, ProviderId],
    base_url: Optional[str],
    api_key: str,
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ListModelsResult:
    """List one provider's catalog.  Raises UnknownProviderError for bad ids only."""
    adapter = get_adapter(provider)
    return await adapter.list_models(base_url, api_key, timeout=timeout, transport=transport)


async def list_openai_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.OPENAI.value].list_models(base_url, api_key, **kwargs)


async def list_google_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.GOOGLE.value].list_models(base_url, api_key, **kwargs)


async def list_openrouter_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.OPENROUTER.value].list_models(base_url, api_key, **kwargs)


async def list_mistral_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.MISTRAL.value].list_models(base_url, api_key, **kwargs)


async def list_anthropic_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.ANTHROPIC.value].list_models(base_url, api_key, **kwargs)


async def list_generic_models(base_url: Optional[str], api_key: str, **kwargs: Any) -> ListModelsResult:
    return await _ADAPTERS[ProviderId.GENERIC.value].list_models(base_url, api_key, **kwargs)


@dataclass(frozen=True)
class CatalogRequest:
    provider: str
    base_url: Optional[str]
    api_key: str = field(repr=False)


async def list_all_models(
    requests: Iterable[CatalogRequest],
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[CatalogRequest, ListModelsResult]:
    """Discover several endpoints concurrently; one independent call each.

    Results are keyed by request, in request order, so two endpoints of the
    same provider (e.g. two OpenAI-compatible servers) are both listed.
    Identical requests are fetched once.  Unknown provider ids are rejected
    before any request is made.
    """
    unique = list(dict.fromkeys(requests))
    adapters = [get_adapter(req.provider) for req in unique]
    tasks = [
        adapter.list_models(req.base_url, req.api_key, timeout=timeout, transport=transport)
        for adapter, req in zip(adapters, unique)
    ]
    results = await asyncio.gather(*tasks)
    return dict(zip(unique, results))


def default_base_url(provider: Union[str, ProviderId]) -> Optional[str]:
    key = get_adapter(provider).provider.value
    return PROVIDER_CATALOGUE[key]["default_base_url"]
