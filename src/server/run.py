"""CLI entry point for launching the FastAPI app with uvicorn."""

import uvicorn

from .app import app
from .dependencies import config


def main() -> None:
    """Run the server.

    A single worker keeps one TaskListStore owning the collection.
    """
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        workers=1,
    )


if __name__ == "__main__":
    main()
