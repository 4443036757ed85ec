from __future__ import annotations

import asyncio
import os

from hypercorn.asyncio import serve
from hypercorn.config import Config

from backend.api import app as backend_app

BACKEND_HOST = os.getenv("DEV_HOST", "127.0.0.1")
BACKEND_PORT = int(os.getenv("DEV_PORT", "8000"))


def build_config(host: str = BACKEND_HOST, port: int = BACKEND_PORT) -> Config:
    """Hypercorn config for local development."""
    config = Config()
    config.bind = [f"{host}:{port}"]
    config.reload = True
    config.workers = 1
    return config


async def _serve_backend() -> None:
    """Run FastAPI backend with Hypercorn."""
    config = build_config()
    print(f"[backend] Listening on http://{BACKEND_HOST}:{BACKEND_PORT} (reload enabled)")
    await serve(backend_app, config)


def main() -> None:
    """Serve the proxy locally without the serverless runtime."""
    try:
        asyncio.run(_serve_backend())
    except KeyboardInterrupt:
        print("\nStopping development server...")


if __name__ == "__main__":
    main()
