from __future__ import annotations

import logging

import uvicorn

from taskapi.config import SETTINGS
from taskapi.infra.db import init_db
from taskapi.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    try:
        init_db(create_schema=SETTINGS.auto_create_schema)
    except Exception:  # noqa: BLE001
        logger.exception("Database is not reachable")
        raise SystemExit(1)

    uvicorn.run(
        "taskapi.app:create_app",
        factory=True,
        host=SETTINGS.api_host,
        port=SETTINGS.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
