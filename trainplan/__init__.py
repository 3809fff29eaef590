"""trainplan - training program tree editing and volume metrics.

Importing the package leaves loguru's handlers alone. Applications that want
trainplan's sinks call `trainplan.core.logger.configure_logging()`, which
reads LOG_LEVEL, LOG_FILE and LOG_JSON from settings.
"""

__version__ = "0.1.0"
