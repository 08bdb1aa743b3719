"""
server.py — Small FastAPI surface over the catalog engine.

Lets a host application ask for a provider catalog over HTTP:
  GET  /                          — liveness
  GET  /health                    — liveness + provider count
  GET  /providers                 — known provider ids, default base URLs, auth style
  POST /v1/catalog/{provider}     — fetch + classify one provider's /models list

Nothing is cached or persisted: every catalog request hits the provider once.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException  # type: ignore[import]
from pydantic import BaseModel, Field  # type: ignore[import]

from llm_catalog import __version__
from llm_catalog.config import PROVIDER_CATALOGUE, settings
from llm_catalog.discovery import list_models, supported_providers
from llm_catalog.errors import UnknownProviderError

logger = logging.getLogger(__name__)


app = FastAPI(
    title="LLM Model Catalog",
    version=__version__,
    description=(
        "Normalised chat-model catalogs for OpenAI, Google Gemini, OpenRouter,"
        " Mistral, Anthropic and any OpenAI-compatible endpoint."
    ),
)


class CatalogRequestBody(BaseModel):
    """Credentials for one catalog lookup; base_url falls back to the provider default."""

    api_key: str = ""
    base_url: Optional[str] = Field(None, description="e.g. https://api.openai.com/v1")


# ══════════════════════════════════════════════════════════════════════════════
# Routes
# ══════════════════════════════════════════════════════════════════════════════


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    return {"status": "ok", "service": "LLM Model Catalog"}


@app.get("/health", tags=["Observability"])
async def health() -> dict[str, Any]:
    return {"status": "healthy", "providers_total": len(supported_providers())}


@app.get("/providers", tags=["Discovery"])
async def providers() -> dict[str, Any]:
    return {
        "providers": [
            {
                "id": p,
                "label": PROVIDER_CATALOGUE[p]["label"],
                "default_base_url": PROVIDER_CATALOGUE[p]["default_base_url"],
                "auth": PROVIDER_CATALOGUE[p]["auth"],
            }
            for p in supported_providers()
        ]
    }


@app.post("/v1/catalog/{provider}", tags=["Discovery"])
async def provider_catalog(provider: str, body: CatalogRequestBody) -> dict[str, Any]:
    if provider not in PROVIDER_CATALOGUE:
        raise HTTPException(status_code=404, detail=f"Provider '{provider}' not found")
    base_url = body.base_url or PROVIDER_CATALOGUE[provider]["default_base_url"]
    try:
        result = await list_models(provider, base_url, body.api_key)
    except UnknownProviderError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"provider": provider, **result.to_dict()}


# ══════════════════════════════════════════════════════════════════════════════
# Entry point
# ══════════════════════════════════════════════════════════════════════════════


def main():
    import argparse
    from pathlib import Path

    import uvicorn  # type: ignore[import]
    from dotenv import load_dotenv  # type: ignore[import]

    env_path = Path.cwd() / ".env"
    if load_dotenv(env_path, override=False):
        settings.reload()
        logger.debug("Loaded environment from %s", env_path)

    parser = argparse.ArgumentParser(description="Start the model catalog server.")
    parser.add_argument("--host", default=settings.host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Enable reload/debug mode",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    uvicorn.run(
        "llm_catalog.server:app",
        host=args.host,
        port=args.port,
        reload=args.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
