import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "aiosqlite", "aiomysql")


def setup_logging(is_dev: bool = True) -> None:
    logging.basicConfig(level=logging.DEBUG if is_dev else logging.INFO, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
