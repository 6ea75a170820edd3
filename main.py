import sys

from linescore_relay.logging.setup import setup_logging
from linescore_relay.config.settings import settings

setup_logging()

from loguru import logger

import uvicorn
from rich import print
from rich.panel import Panel

from linescore_relay.errors import ConfigurationError
from linescore_relay.extraction.columns import validate_columns


def main() -> None:
    """Main entry point: validate the column table and serve the relay."""
    try:
        validate_columns()
    except ConfigurationError as e:
        logger.critical(f"Refusing to start: {e}")
        sys.exit(1)

    print(
        Panel.fit(
            f"Line Score Relay\n"
            f"listening on http://{settings.relay_host}:{settings.relay_port}/\n"
            f"upstream: {settings.box_score_summary_url}?GameID={settings.game_id}",
            title="linescore-relay",
        )
    )

    # log_config=None keeps uvicorn from replacing the intercepted logging setup
    uvicorn.run(
        "linescore_relay.api.app:app",
        host=settings.relay_host,
        port=settings.relay_port,
        log_config=None,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
