"""ValidateService — adapts the Verifier to the ServiceResult contract.

The Verifier returns plain reports; the CLI wants a ServiceResult with
items, counts and warnings it can render as JSON, quiet lines, or a
table. This module is that seam, plus the factory that assembles a
Verifier from settings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from mailgate.domain.rules import (
    DomainRule,
    InvalidConfigurationError,
    PatternRule,
    ValidationRule,
    is_blank,
)
from mailgate.services.result import ServiceResult
from mailgate.services.telemetry import current_span, traced
from mailgate.services.verifier import Verifier

if TYPE_CHECKING:
    from mailgate.config.settings import MailgateSettings

logger = logging.getLogger(__name__)

SAMPLE_DOMAIN = "empresa.com"
SAMPLE_ADDRESSES: tuple[str, ...] = (
    "contato@empresa.com",
    "usuario.invalido@",
    "hacker@gmail.com",
    "diretoria@empresa.com",
)


def build_verifier(
    settings: MailgateSettings,
    *,
    domain: str | None = None,
    max_workers: int | None = None,
) -> Verifier:
    """Assemble a Verifier from settings, with per-call overrides.

    Always includes :class:`PatternRule`; adds :class:`DomainRule` when a
    domain is given here or configured via ``MAILGATE_RULES__DOMAIN``.

    Raises:
        InvalidConfigurationError: the domain is empty or whitespace, which
            would turn the domain rule into an "ends with @" check.
    """
    rules: list[ValidationRule] = [PatternRule()]
    corporate_domain = domain if domain is not None else settings.rules.domain
    if corporate_domain is not None:
        if is_blank(corporate_domain):
            raise InvalidConfigurationError("Corporate domain cannot be blank")
        rules.append(DomainRule(corporate_domain))
    return Verifier(
        rules,
        max_workers=max_workers if max_workers is not None else settings.batch.max_workers,
        parallel_threshold=settings.batch.parallel_threshold,
    )


def build_sample_verifier() -> Verifier:
    """The fixed PatternRule + DomainRule("empresa.com") demo wiring."""
    return Verifier([PatternRule(), DomainRule(SAMPLE_DOMAIN)])


class ValidateService:
    """Run a Verifier over a batch and summarise the outcome."""

    def __init__(self, verifier: Verifier) -> None:
        self._verifier = verifier

    @traced
    def validate(
        self,
        addresses: Iterable[str | None],
        *,
        valid_only: bool = False,
    ) -> ServiceResult:
        """Validate *addresses* and return per-address items plus counts.

        ``items[i]["index"]`` is always the input position, also when
        *valid_only* drops failing entries.
        """
        return self._run("validate", addresses, valid_only=valid_only)

    @traced
    def demo(self) -> ServiceResult:
        """Validate the fixed sample addresses."""
        return self._run("demo", SAMPLE_ADDRESSES)

    def _run(
        self,
        op: str,
        addresses: Iterable[str | None],
        *,
        valid_only: bool = False,
    ) -> ServiceResult:
        warnings: list[str] = []
        reports = self._verifier.process_emails(addresses)
        if not reports:
            warnings.append("No addresses supplied")

        items = [
            {"index": index, "address": report.address, "valid": report.is_valid}
            for index, report in enumerate(reports)
        ]
        valid_count = sum(1 for item in items if item["valid"])

        span = current_span()
        if span:
            span.annotate(rules=[repr(rule) for rule in self._verifier.rules])

        if valid_only:
            items = [item for item in items if item["valid"]]

        logger.debug("Validated %d addresses, %d valid", len(reports), valid_count)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "items": items,
                "count": len(reports),
                "valid_count": valid_count,
                "invalid_count": len(reports) - valid_count,
            },
            warnings=warnings,
        )
