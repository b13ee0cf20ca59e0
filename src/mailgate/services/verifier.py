"""Verifier — AND-composition of validation rules plus batch processing.

The rule set is snapshotted into a tuple at construction and never
changes afterwards. Batch workers only read the rules, and each writes
to its own slots of a pre-sized result buffer.

INVARIANT: ``process_emails(xs)[i]`` reports on ``xs[i]`` regardless of
which worker evaluated it or when it finished.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from mailgate.domain.report import ValidationReport
from mailgate.domain.rules import InvalidConfigurationError, PredicateRule, ValidationRule
from mailgate.services.telemetry import trace_span

if TYPE_CHECKING:
    from mailgate.services.telemetry import Span

logger = logging.getLogger(__name__)

DEFAULT_PARALLEL_THRESHOLD = 256


def _as_rule(index: int, rule: object) -> ValidationRule:
    if rule is None:
        raise InvalidConfigurationError(f"Rule at index {index} is None")
    if isinstance(rule, ValidationRule):
        return rule
    if callable(rule):
        return PredicateRule(rule)
    raise InvalidConfigurationError(
        f"Rule at index {index} is neither callable nor implements is_valid(): {rule!r}"
    )


class Verifier:
    """Composes rules with logical AND.

    Parameters:
        rules: Ordered rules to apply. Copied; later changes to the
            caller's collection have no effect. Plain callables taking an
            address and returning a truth value are wrapped in
            :class:`~mailgate.domain.rules.PredicateRule`.
        max_workers: Thread pool size for large batches. ``None`` uses the
            :class:`~concurrent.futures.ThreadPoolExecutor` default sizing.
        parallel_threshold: Batches smaller than this run sequentially
            on the caller's thread.

    Raises:
        InvalidConfigurationError: *rules* is None, contains None or a
            non-rule object, or a worker setting is below 1.
    """

    def __init__(
        self,
        rules: Iterable[ValidationRule | Callable[[str | None], object]] | None,
        *,
        max_workers: int | None = None,
        parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
    ) -> None:
        if rules is None:
            raise InvalidConfigurationError("Rules cannot be None")
        snapshot = tuple(_as_rule(index, rule) for index, rule in enumerate(rules))
        if max_workers is not None and max_workers < 1:
            raise InvalidConfigurationError(f"max_workers must be >= 1, got {max_workers}")
        if parallel_threshold < 1:
            raise InvalidConfigurationError(
                f"parallel_threshold must be >= 1, got {parallel_threshold}"
            )

        self._rules = snapshot
        self._max_workers = max_workers
        self._parallel_threshold = parallel_threshold

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        return self._rules

    def __repr__(self) -> str:
        return f"Verifier(rules={list(self._rules)!r})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_valid_email(self, address: str | None) -> bool:
        """True iff every rule accepts *address*. Vacuously True with no rules."""
        return all(rule.is_valid(address) for rule in self._rules)

    def process_emails(self, addresses: Iterable[str | None]) -> list[ValidationReport]:
        """Validate a batch, returning one report per input in input order.

        Duplicates are kept. Large batches fan out across a thread pool;
        the ordering guarantee holds either way.

        Raises:
            TypeError: *addresses* is a single ``str`` rather than a batch.
        """
        if isinstance(addresses, str):
            raise TypeError("process_emails() takes a batch of addresses, not a single str")
        batch: Sequence[str | None] = list(addresses)
        if not batch:
            return []

        with trace_span("process_emails") as span:
            if len(batch) < self._parallel_threshold:
                reports = [self._report(address) for address in batch]
                mode = "sequential"
            else:
                reports = self._process_parallel(batch, span)
                mode = "parallel"
            if span:
                span.annotate(batch_size=len(batch), mode=mode)

        logger.debug("Processed %d addresses (%s)", len(batch), mode)
        return reports

    def filter_valid_emails(self, addresses: Iterable[str | None]) -> list[str]:
        """Only the addresses that pass every rule, in input order."""
        return [
            report.address
            for report in self.process_emails(addresses)
            if report.is_valid and report.address is not None
        ]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _report(self, address: str | None) -> ValidationReport:
        return ValidationReport(address=address, is_valid=self.is_valid_email(address))

    def _process_parallel(
        self,
        batch: Sequence[str | None],
        span: Span | None,
    ) -> list[ValidationReport]:
        """Evaluate contiguous index chunks concurrently into a pre-sized buffer."""
        results: list[ValidationReport | None] = [None] * len(batch)

        def evaluate(start: int, stop: int) -> None:
            for i in range(start, stop):
                results[i] = self._report(batch[i])

        workers = self._max_workers or min(32, (os.cpu_count() or 1) + 4)
        with ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="mailgate-verifier",
        ) as executor:
            chunk_size = max(1, -(-len(batch) // (workers * 4)))
            futures = [
                executor.submit(evaluate, start, min(start + chunk_size, len(batch)))
                for start in range(0, len(batch), chunk_size)
            ]
            for future in futures:
                future.result()

        if span:
            span.annotate(workers=workers, chunks=len(futures))

        assert all(report is not None for report in results)
        return results  # type: ignore[return-value]
