import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts and test sessions"""
    logging.basicConfig(
        level=logging.WARNING,  # Set default to WARNING for all loggers
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )

    # Harness loggers at the requested level
    logging.getLogger("gcs_cli_harness").setLevel(level.upper())

    # Keep third-party loggers quiet
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
