import logging

LOGGER_NAME = "abort_incomplete_multipart"


def setup_logger(log_file=None):
    """Setup logger to log messages to the console (stderr) and optionally to a file."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Drop handlers from an earlier run in the same process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Create handlers
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    # Create formatters and add them to the handlers
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', '%Y-%m-%d %H:%M:%S')
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
