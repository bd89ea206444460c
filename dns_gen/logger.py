import logging

logger = logging.getLogger("dns-gen")

logging_handler = logging.StreamHandler()
logging_formatter = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)
logging_handler.setFormatter(logging_formatter)
logger.addHandler(logging_handler)
logger.setLevel(logging.INFO)


def setup_logging(debug: bool):
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
