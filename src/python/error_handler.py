"""
Routine Planner Error Handler Module

This module provides a centralized error handling system that:
1. Logs errors through the logging system
2. Provides a consistent error reporting pattern throughout the application
"""

import logging

logger = logging.getLogger("routine_planner.error_handler")


class ErrorHandler:
    """Centralized error handling for the routine planner."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception with its stack trace and return a short description."""
        error_type = type(e).__name__
        error_msg = str(e)

        if context:
            logger.error("%s: %s: %s", context, error_type, error_msg, exc_info=e)
        else:
            logger.error("%s: %s", error_type, error_msg, exc_info=e)

        return f"{error_type}: {error_msg}"

    @staticmethod
    def report_recoverable(e: Exception, context: str = "") -> str:
        """Log a failure the application recovers from and return a short description.

        Used for bad user input (malformed import files, corrupt autosave) where
        state is left unchanged and editing continues.
        """
        error_type = type(e).__name__
        error_msg = str(e)
        if context:
            logger.warning("%s: %s: %s", context, error_type, error_msg)
        else:
            logger.warning("%s: %s", error_type, error_msg)
        return f"{error_type}: {error_msg}"
