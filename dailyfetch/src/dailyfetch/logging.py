import logging
import sys

# Loggers from the HTTP stack that are noisy at INFO/DEBUG
_NOISY_LOGGERS = ("urllib3", "requests")

def configure_logging(level=logging.INFO, verbose_http: bool = False):
    """
    Send dailyfetch logs to stderr so stdout stays clean for JSON output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    if root_logger.handlers:
        root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if not verbose_http:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
