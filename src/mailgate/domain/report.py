"""ValidationReport — one address paired with its verdict."""

from __future__ import annotations

from pydantic import BaseModel


class ValidationReport(BaseModel):
    """Immutable (address, verdict) pair produced once per processed address."""

    model_config = {"frozen": True}

    address: str | None
    is_valid: bool
