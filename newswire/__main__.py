"""Entrypoint for running the news API server."""

from __future__ import annotations

import logging

import uvicorn

from .client import NewsClient
from .config import load_config
from .server import create_app


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    client = NewsClient.from_settings(config)
    if not client.available_providers():
        logging.warning("Starting without providers; search and headlines will return 503")

    app = create_app(client, cors_origins=config.cors_origins)

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # pragma: no cover - runtime hook
        await client.aclose()

    logging.info("Starting API server on %s:%s", config.api_host, config.api_port)
    uvicorn.run(app, host=config.api_host, port=config.api_port)


if __name__ == "__main__":  # pragma: no cover
    main()
