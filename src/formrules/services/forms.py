"""FormService — validate records against named form definitions.

Form definitions come from ``[forms.<name>]`` sections of formrules.toml.
Each check runs a fresh :class:`ValidationSession` seeded with the form's
initial values, replays the submitted fields through ``handle_change`` and
``handle_blur``, then runs a full ``validate_all`` as a submit would.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from formrules.domain.descriptors import RuleDescriptor
from formrules.domain.rules import (
    RULE_CATALOG,
    RULE_PARAMS,
    RuleConfigurationError,
    canonical_name,
)
from formrules.domain.session import ValidationSession
from formrules.services.base import BaseService
from formrules.services.contracts import (
    CatalogData,
    CheckResultData,
    DescribeFormData,
    ListFormsData,
    dump_validated,
)
from formrules.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)

# Placeholder parameters used to instantiate catalog rules for inspection.
_SAMPLE_PARAMS: dict[str, Any] = {"min": 0, "max": 0, "pattern": ".*"}


class FormService(BaseService):
    """Validates records and describes the configured forms."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _session(self, op: str, name: str) -> ValidationSession | ServiceResult:
        """Build a session for *name*, or the error result explaining why not."""
        form = self._form(name)
        if form is None:
            return self._unknown_form(op, name)
        try:
            return ValidationSession(form.initial, form.rules)
        except RuleConfigurationError as exc:
            log.warning("form_config_invalid", form=name, error=str(exc))
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_CONFIG",
                    message=f"Form '{name}' has an invalid rule configuration",
                    detail={"reason": str(exc)},
                ),
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_forms(self) -> ServiceResult:
        """List every configured form."""
        items = [
            {
                "name": name,
                "description": form.description,
                "field_count": len(form.rules),
            }
            for name, form in sorted(self._settings.forms.items())
        ]
        data = dump_validated(ListFormsData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="list_forms", data=data)

    def describe(self, name: str) -> ServiceResult:
        """Show a form's initial values and the rules on each field."""
        op = "describe_form"
        session = self._session(op, name)
        if isinstance(session, ServiceResult):
            return session

        registry = session.registry
        fields = [
            {
                "field": field,
                "rules": [
                    {"rule": rule.name, "message": rule.message, "params": dict(rule.params)}
                    for rule in registry.rules_for(field)
                ],
            }
            for field in registry.fields
        ]
        form = self._form(name)
        data = dump_validated(
            DescribeFormData,
            {
                "form": name,
                "description": form.description if form else "",
                "initial": session.initial_values,
                "fields": fields,
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    def check(self, name: str, record: Mapping[str, Any]) -> ServiceResult:
        """Validate *record* against form *name*.

        Submitted fields are applied on top of the form's initial values.
        Fields with rules that end up with no value at all are reported as
        ``skipped`` and listed in ``warnings``.
        """
        op = "check"
        session = self._session(op, name)
        if isinstance(session, ServiceResult):
            return session

        for field, value in record.items():
            session.handle_change(field, value)
            session.handle_blur(field)
        valid = session.validate_all()

        values = session.values
        errors = session.errors
        touched = session.touched
        warnings: list[str] = []
        reports: list[dict[str, Any]] = []
        ordered = list(session.registry.fields)
        ordered += [field for field in values if field not in session.registry]
        for field in ordered:
            if field not in values:
                warnings.append(f"Field '{field}' has rules but no value; not validated")
                status = "skipped"
            elif field in errors:
                status = "invalid"
            else:
                status = "ok"
            reports.append(
                {
                    "field": field,
                    "status": status,
                    "errors": errors.get(field, []),
                    "touched": touched.get(field, False),
                }
            )

        data = dump_validated(
            CheckResultData,
            {
                "form": name,
                "valid": valid,
                "values": values,
                "errors": errors,
                "fields": reports,
            },
        )
        log.info("form_checked", form=name, valid=valid, failing=sorted(errors))

        if not valid:
            return ServiceResult(
                ok=False,
                op=op,
                warnings=warnings,
                error=ServiceError(
                    code="INVALID_RECORD",
                    message=f"{len(errors)} field(s) failed validation",
                    detail=data,
                ),
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def catalog(self) -> ServiceResult:
        """List the built-in rules and the parameters each requires."""
        aliases: dict[str, list[str]] = {}
        for alias in RULE_CATALOG:
            canonical = canonical_name(alias)
            if canonical != alias:
                aliases.setdefault(canonical, []).append(alias)

        items = []
        for name, params in RULE_PARAMS.items():
            sample = RuleDescriptor(rule=name, **{p: _SAMPLE_PARAMS[p] for p in params}).build()
            items.append(
                {
                    "rule": name,
                    "params": list(params),
                    "skips_empty": sample.skip_empty,
                    "aliases": aliases.get(name, []),
                }
            )
        data = dump_validated(CatalogData, {"count": len(items), "items": items})
        return ServiceResult(ok=True, op="rules", data=data)
