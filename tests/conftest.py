"""Shared pytest fixtures and test helpers for mailgate tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from mailgate.domain.rules import DomainRule, PatternRule
from mailgate.services.telemetry import _active, disable_telemetry
from mailgate.services.verifier import Verifier

SAMPLE_BATCH = [
    "contato@empresa.com",
    "usuario.invalido@",
    "hacker@gmail.com",
    "diretoria@empresa.com",
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def corporate_verifier() -> Verifier:
    """PatternRule + DomainRule("empresa.com"), the canonical wiring."""
    return Verifier([PatternRule(), DomainRule("empresa.com")])


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep MAILGATE_* variables from the host shell out of tests."""
    for key in list(os.environ):
        if key.startswith("MAILGATE_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    mailgate_logger = logging.getLogger("mailgate")
    handlers = mailgate_logger.handlers[:]
    level = mailgate_logger.level
    propagate = mailgate_logger.propagate
    yield
    disable_telemetry()
    _active.set(None)
    mailgate_logger.handlers = handlers
    mailgate_logger.setLevel(level)
    mailgate_logger.propagate = propagate
