"""
Utility functions and helpers for the MoveNow application.

This module contains the structured logging helpers shared by the Lambda
handler and the service layer.
"""

from .structured_log import log_event, mask_token

__all__ = ["log_event", "mask_token"]
