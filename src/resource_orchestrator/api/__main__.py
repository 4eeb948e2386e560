"""
resource_orchestrator.api.__main__

Entrypoint for `python -m resource_orchestrator.api` (and the `resource-orchestrator` script).

Responsibilities:
- Load settings, create the app and serve it with uvicorn.
"""

from __future__ import annotations

import uvicorn

from resource_orchestrator.api.app import create_app
from resource_orchestrator.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
