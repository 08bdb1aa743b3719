"""Public package surface for llm_catalog.

Expose the primary entry points used by consumers of the package.
"""

__version__ = "0.1.0"

from llm_catalog.config import PROVIDER_CATALOGUE, REQUEST_TIMEOUT, settings
from llm_catalog.discovery import (
    CatalogRequest,
    ProviderAdapter,
    get_adapter,
    list_all_models,
    list_anthropic_models,
    list_generic_models,
    list_google_models,
    list_mistral_models,
    list_models,
    list_openai_models,
    list_openrouter_models,
    supported_providers,
)
from llm_catalog.errors import UnknownProviderError
from llm_catalog.models import (
    IgnoreReason,
    InputModality,
    ListModelsResult,
    ModelMetadata,
    ProviderId,
    default_result,
)

__all__ = [
    "PROVIDER_CATALOGUE",
    "REQUEST_TIMEOUT",
    "CatalogRequest",
    "IgnoreReason",
    "InputModality",
    "ListModelsResult",
    "ModelMetadata",
    "ProviderAdapter",
    "ProviderId",
    "UnknownProviderError",
    "__version__",
    "default_result",
    "get_adapter",
    "list_all_models",
    "list_anthropic_models",
    "list_generic_models",
    "list_google_models",
    "list_mistral_models",
    "list_models",
    "list_openai_models",
    "list_openrouter_models",
    "settings",
    "supported_providers",
]
