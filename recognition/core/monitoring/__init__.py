# Local application imports
from recognition.core.monitoring.logging import get_contextual_logger, get_logger
from recognition.core.monitoring.sentry import _setup_sentry_logging, capture_exception

__all__ = ["get_contextual_logger", "_setup_sentry_logging", "capture_exception", "get_logger"]
