"""Pydantic configuration section models with code-baked defaults.

Each section maps to a nested env var group, e.g.
``MAILGATE_RULES__DOMAIN=empresa.com`` or ``MAILGATE_BATCH__MAX_WORKERS=8``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RulesConfig(BaseModel):
    """[rules] section."""

    model_config = {"frozen": True}

    domain: str | None = None


class BatchConfig(BaseModel):
    """[batch] section."""

    model_config = {"frozen": True}

    max_workers: int | None = Field(default=None, ge=1)
    parallel_threshold: int = Field(default=256, ge=1)
