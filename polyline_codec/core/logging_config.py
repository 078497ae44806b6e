import logging
import sys

from polyline_codec.core.config import settings

def setup_logging():
    """
    Configure logging for the application.
    
    Logs go to stdout with timestamps, log levels, and module names so they
    are picked up as-is by Docker and Kubernetes.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    
    # Access logs are already emitted by the ASGI server
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    
    return logging.getLogger("polyline_codec")


# Create global logger instance
logger = setup_logging()
