"""Run the issuegroup API server: ``python -m issuegroup``."""

from __future__ import annotations

import os

import uvicorn

from issuegroup.logging import setup_logging


def main() -> None:
    """Configure logging and serve the API."""
    setup_logging()
    uvicorn.run(
        "issuegroup.api.app:app",
        host=os.environ.get("ISSUEGROUP_HOST", "127.0.0.1"),
        port=int(os.environ.get("ISSUEGROUP_PORT", "8000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
