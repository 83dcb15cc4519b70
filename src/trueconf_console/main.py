"""Local development runner."""

import logging

import uvicorn

from trueconf_console.app_logging import configure_logging
from trueconf_console.config import Settings


def main() -> None:
    """Serve the console locally on the configured port."""
    settings = Settings()
    configure_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "TrueConf User Console running at http://localhost:%s", settings.port
    )
    uvicorn.run("trueconf_console.api.asgi:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
