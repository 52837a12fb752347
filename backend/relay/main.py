"""
FastAPI application entrypoint.
"""
from __future__ import annotations

import uvicorn

from relay.api import create_app
from relay.startup import initialize_app

settings = initialize_app()

app = create_app(settings)


def main() -> None:
    """Run the relay with uvicorn on HOST:PORT."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
