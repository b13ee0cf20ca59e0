"""Tests for the human and quiet renderers."""

from __future__ import annotations

from mailgate.output.renderers import render_quiet, render_result
from mailgate.services.result import ServiceResult

_ITEMS = [
    {"index": 0, "address": "contato@empresa.com", "valid": True},
    {"index": 1, "address": "usuario.invalido@", "valid": False},
    {"index": 2, "address": "hacker@gmail.com", "valid": False},
    {"index": 3, "address": "diretoria@empresa.com", "valid": True},
]

_TELEMETRY = {
    "name": "ValidateService.validate",
    "duration_ms": 1.5,
    "annotations": {"rules": ["PatternRule()"]},
    "children": [
        {
            "name": "process_emails",
            "duration_ms": 1.2,
            "annotations": {"batch_size": 4, "mode": "sequential"},
        }
    ],
}


def _result(op: str, items: list[dict[str, object]] = _ITEMS, **extra: object) -> ServiceResult:
    valid = sum(1 for i in items if i["valid"])
    data = {"items": items, "count": len(items), "valid_count": valid}
    data["invalid_count"] = len(items) - valid
    return ServiceResult(ok=True, op=op, data=data, **extra)  # type: ignore[arg-type]


class TestRenderValidate:
    def test_status_table_and_tally(self) -> None:
        output = render_result(_result("validate"))
        lines = output.splitlines()
        assert lines[0].startswith("OK")
        assert "validate" in lines[0]
        assert "Address" in output
        assert lines[-1].strip() == "2 valid, 2 invalid of 4"

    def test_rows_in_input_order(self) -> None:
        output = render_result(_result("validate"))
        positions = [output.index(item["address"]) for item in _ITEMS]  # type: ignore[arg-type]
        assert positions == sorted(positions)

    def test_absent_address_shown(self) -> None:
        items = [{"index": 0, "address": None, "valid": False}]
        assert "<none>" in render_result(_result("validate", items))

    def test_markup_in_address_not_interpreted(self) -> None:
        items = [{"index": 0, "address": "[bold]x@y.com", "valid": False}]
        assert "[bold]x@y.com" in render_result(_result("validate", items))

    def test_empty_batch_no_table(self) -> None:
        output = render_result(_result("validate", []))
        assert "Address" not in output
        assert "0 valid, 0 invalid of 0" in output


class TestTelemetryTree:
    def test_verbose_renders_span_tree(self) -> None:
        output = render_result(_result("validate", meta={"telemetry": _TELEMETRY}), verbose=True)
        assert "telemetry" in output
        assert "ValidateService.validate 1.50ms" in output
        assert "batch_size=4, mode=sequential" in output

    def test_child_nested_below_root(self) -> None:
        output = render_result(_result("validate", meta={"telemetry": _TELEMETRY}), verbose=True)
        lines = output.splitlines()
        root = next(i for i, line in enumerate(lines) if "ValidateService.validate" in line)
        child = next(i for i, line in enumerate(lines) if "process_emails" in line)
        assert child == root + 1
        assert lines[child].index("process_emails") > lines[root].index("ValidateService")

    def test_hidden_when_not_verbose(self) -> None:
        output = render_result(_result("validate", meta={"telemetry": _TELEMETRY}))
        assert "ValidateService.validate" not in output

    def test_demo_also_gets_tree(self) -> None:
        output = render_result(_result("demo", meta={"telemetry": _TELEMETRY}), verbose=True)
        assert output.splitlines()[0].startswith("Email: ")
        assert "process_emails" in output


class TestRenderDemo:
    def test_one_line_per_address(self) -> None:
        lines = render_result(_result("demo")).splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("Email: contato@empresa.com")
        assert [line.rsplit(" ", 1)[-1] for line in lines] == ["true", "false", "false", "true"]

    def test_address_column_padded(self) -> None:
        lines = render_result(_result("demo")).splitlines()
        assert all(line.index("|") == lines[0].index("|") for line in lines)


class TestRenderFailure:
    def test_error_line_carries_code(self) -> None:
        result = ServiceResult.failure(
            "build_verifier", "INVALID_CONFIGURATION", "Corporate domain cannot be blank"
        )
        output = render_result(result)
        assert output.startswith("ERROR")
        assert "build_verifier: Corporate domain cannot be blank" in output
        assert "[INVALID_CONFIGURATION]" in output


class TestRenderQuiet:
    def test_valid_addresses_only(self) -> None:
        assert render_quiet(_result("validate")) == "contato@empresa.com\ndiretoria@empresa.com"

    def test_failure_line(self) -> None:
        result = ServiceResult.failure("build_verifier", "INVALID_CONFIGURATION", "bad domain")
        assert render_quiet(result) == "ERROR: build_verifier: bad domain"
