"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Plain acknowledgement for state-changing calls."""

    success: bool = True
