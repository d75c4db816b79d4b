"""
Utilities for EcoChallenge.
"""

from .logging import request_context, setup_logging

__all__ = ["request_context", "setup_logging"]
