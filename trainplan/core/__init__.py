"""Shared infrastructure (logging)."""

from trainplan.core.logger import configure_logging, setup_logger

__all__ = ["configure_logging", "setup_logger"]
