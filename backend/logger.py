import logging

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO"):
    """Attach one stream handler to the root logger and the server loggers.

    Safe to call more than once; handlers are only added the first time.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    if not any(getattr(h, "_timetable_handler", False) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        handler._timetable_handler = True
        root_logger.addHandler(handler)

    # uvicorn installs its own handlers; only align the levels
    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "backend"]:
        logging.getLogger(logger_name).setLevel(level.upper())
