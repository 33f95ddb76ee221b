import logging
import sys

def setup_logging():
    """
    Configure logging for the pizza service.

    Logs go to stdout with timestamps, levels and logger names so the
    container runtime can collect them.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # Reduce SQLAlchemy noise in logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("pizza")


# Create global logger instance
logger = setup_logging()
