"""Pydantic record modeling for structkit.

This module provides the BaseRecord class for declaring binary records as
validated Pydantic models.
"""

from __future__ import annotations

from .base import BaseRecord

__all__ = [
    "BaseRecord",
]
