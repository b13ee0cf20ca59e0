"""Validation rules — the per-address predicates a Verifier composes.

Every rule satisfies :class:`ValidationRule`: a single ``is_valid`` check
that returns a boolean and never raises for malformed input. Rules hold
no mutable state, so one instance can be shared across worker threads.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Protocol, runtime_checkable

ADDRESS_PATTERN: re.Pattern[str] = re.compile(
    r"[A-Za-z0-9_+&*-]+(?:\.[A-Za-z0-9_+&*-]+)*@(?:[A-Za-z0-9-]+\.)+[A-Za-z]{2,7}"
)


class InvalidConfigurationError(ValueError):
    """A rule or verifier was constructed without a required dependency."""


@runtime_checkable
class ValidationRule(Protocol):
    """Capability shared by all rules."""

    def is_valid(self, address: str | None) -> bool:
        """Return True if *address* passes this rule."""
        ...


def is_blank(address: str | None) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return address is None or not address.strip()


class PatternRule:
    """Structural check against the local-part@label.tld grammar.

    The local part is one or more dot-separated segments of
    ``[A-Za-z0-9_+&*-]``; the domain is one or more ``[A-Za-z0-9-]`` labels
    followed by an alphabetic top-level segment of 2-7 characters.

    Examples:
        >>> PatternRule().is_valid("contato@empresa.com")
        True
        >>> PatternRule().is_valid("a..b@domain.com")
        False
    """

    __slots__ = ()

    def is_valid(self, address: str | None) -> bool:
        if is_blank(address):
            return False
        return ADDRESS_PATTERN.fullmatch(address) is not None  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return "PatternRule()"


class DomainRule:
    """Restrict addresses to one corporate domain, case-insensitively.

    The comparison is a suffix match against ``"@" + domain`` after
    lower-casing both sides. Whitespace is not trimmed.
    """

    __slots__ = ("_domain", "_suffix")

    def __init__(self, domain: str | None) -> None:
        if domain is None:
            raise InvalidConfigurationError("Corporate domain cannot be None")
        self._domain = domain
        self._suffix = f"@{domain}".lower()

    @property
    def domain(self) -> str:
        """The configured domain, as given."""
        return self._domain

    def is_valid(self, address: str | None) -> bool:
        if address is None:
            return False
        return address.lower().endswith(self._suffix)

    def __repr__(self) -> str:
        return f"DomainRule({self._domain!r})"


class PredicateRule:
    """Adapt a plain ``address -> bool`` callable, such as a lambda, to a rule.

    Examples:
        >>> PredicateRule(lambda a: a is not None and len(a) < 64).is_valid("x@y.com")
        True
    """

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Callable[[str | None], object]) -> None:
        if not callable(predicate):
            raise InvalidConfigurationError(f"Predicate is not callable: {predicate!r}")
        self._predicate = predicate

    def is_valid(self, address: str | None) -> bool:
        return bool(self._predicate(address))

    def __repr__(self) -> str:
        name = getattr(self._predicate, "__qualname__", None) or repr(self._predicate)
        return f"PredicateRule({name})"
