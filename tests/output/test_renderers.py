"""Tests for Rich renderers and output mode selection."""

from __future__ import annotations

from formrules.output.formatters import OutputSettings, format_result
from formrules.output.renderers import render_quiet, render_result
from formrules.services.result import ServiceError, ServiceResult


def _check_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="check",
        data={
            "form": "signup",
            "valid": True,
            "values": {"email": "ada@example.com"},
            "errors": {},
            "fields": [
                {"field": "email", "status": "ok", "errors": [], "touched": True},
                {"field": "age", "status": "skipped", "errors": [], "touched": False},
            ],
        },
        warnings=["Field 'age' has rules but no value; not validated"],
    )


def _invalid_result() -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="check",
        error=ServiceError(
            code="INVALID_RECORD",
            message="1 field(s) failed validation",
            detail={
                "errors": {"email": ["Invalid email format"]},
                "fields": [
                    {
                        "field": "email",
                        "status": "invalid",
                        "errors": ["Invalid email format"],
                        "touched": True,
                    }
                ],
            },
        ),
    )


class TestRenderResult:
    def test_check_table(self) -> None:
        output = render_result(_check_result())
        assert output.startswith("OK")
        assert "email" in output
        assert "skipped" in output
        assert "warning" in output

    def test_check_verbose_shows_touched(self) -> None:
        output = render_result(_check_result(), verbose=True)
        assert "Touched" in output
        assert "values" in output

    def test_invalid_record(self) -> None:
        output = render_result(_invalid_result())
        assert output.startswith("ERROR")
        assert "Invalid email format" in output

    def test_generic_fallback(self) -> None:
        output = render_result(ServiceResult(ok=True, op="other", data={"a": 1, "b": [1]}))
        assert "a: 1" in output
        assert "b: [1]" in output
        assert "a:  1" not in output

    def test_empty_form_list(self) -> None:
        result = ServiceResult(ok=True, op="list_forms", data={"count": 0, "items": []})
        assert "No forms configured" in render_result(result)


class TestRenderQuiet:
    def test_failure_lists_messages(self) -> None:
        output = render_quiet(_invalid_result())
        assert output.splitlines() == [
            "ERROR: check — 1 field(s) failed validation",
            "email: Invalid email format",
        ]

    def test_success(self) -> None:
        assert render_quiet(_check_result()) == "OK: check"


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_check_result(), settings=OutputSettings(json_output=True))
        assert '"op": "check"' in output

    def test_default_is_human(self) -> None:
        assert format_result(_check_result()).startswith("OK")
