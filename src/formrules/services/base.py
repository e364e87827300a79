"""BaseService — foundation for formrules services.

Every service receives the resolved :class:`FormrulesSettings` at
construction time and reads form definitions from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from formrules.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from formrules.config.models import FormConfig
    from formrules.config.settings import FormrulesSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class FormService(BaseService):
            def check(self, form: str, record: dict) -> ServiceResult:
                config = self._form(form)
                ...
    """

    def __init__(self, settings: FormrulesSettings) -> None:
        self._settings = settings

    def _form(self, name: str) -> FormConfig | None:
        """Look up a form definition by name."""
        return self._settings.forms.get(name)

    def _unknown_form(self, op: str, name: str) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="UNKNOWN_FORM",
                message=f"No form named '{name}'",
                detail={"known_forms": sorted(self._settings.forms)},
            ),
        )
