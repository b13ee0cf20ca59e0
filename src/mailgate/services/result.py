"""ServiceResult — what ValidateService hands to the CLI renderers.

A validation run that finds invalid addresses is still ``ok``: bad
addresses are data. ``ok=False`` is reserved for runs that could not
start, such as a verifier built from unusable settings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a run could not start, e.g. ``INVALID_CONFIGURATION``."""

    model_config = {"frozen": True}

    code: str
    message: str


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: False only when the run could not start.
        op: ``"validate"`` or ``"demo"`` on success; the failing step otherwise.
        data: Items and counts for a validation run.
        warnings: Non-fatal notes, such as an empty batch.
        error: Set when ``ok`` is False.
        meta: Telemetry span tree under ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message))
