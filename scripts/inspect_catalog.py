import argparse
import asyncio
import logging
import os

from llm_catalog.discovery import default_base_url, list_models, supported_providers


async def main():
    parser = argparse.ArgumentParser(description="Print a provider's normalised model catalog.")
    parser.add_argument("provider", choices=supported_providers())
    parser.add_argument("--base-url", default=None, help="Defaults to the provider's public endpoint")
    parser.add_argument(
        "--key-env",
        default=None,
        help="Environment variable holding the API key (default: <PROVIDER>_API_KEY)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    key_env = args.key_env or f"{args.provider.upper()}_API_KEY"
    base_url = args.base_url or default_base_url(args.provider)
    result = await list_models(args.provider, base_url, os.getenv(key_env, ""))

    print(f"--- {args.provider}: {len(result.included)} included ---")
    for mid in result.included:
        modalities = ",".join(m.value for m in result.metadata[mid].input_modalities)
        print(f"{mid}  [{modalities}]")

    print(f"--- {len(result.ignored)} ignored ---")
    for mid, reasons in result.ignored.items():
        print(f"{mid}: {', '.join(r.value for r in reasons)}")


if __name__ == "__main__":
    asyncio.run(main())
