"""
Common utilities package for the task manager service.

Authentication primitives live in ``app.utils.auth`` and are imported from
there directly, since they depend on ``app.config`` which itself logs through
``app.utils.logger``.
"""

from app.utils.logger import setup_logger

__all__ = ["setup_logger"]
