"""Admission checks that block Deployment changes during an active maintenance window."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Iterable

from .api import MaintenanceWindow, MaintenanceWindowState

logger = logging.getLogger("deployment-resource")


@dataclass
class Deployment:
    """The part of a Deployment the validator looks at."""

    name: str = ""
    namespace: str = ""


class AdmissionDenied(Exception):
    """Raised when a request is refused; carries warnings for the caller."""

    def __init__(self, message: str, warnings: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.warnings = list(warnings)


@dataclass(frozen=True)
class AdmissionResponse:
    """Answer to an admission request."""

    allowed: bool
    message: str = ""
    code: int = HTTPStatus.OK


@dataclass
class ValidationResult:
    """Outcome of a successful validation."""

    warnings: list[str] = field(default_factory=list)


def _blocked_message(window: MaintenanceWindow) -> str:
    quoted = json.dumps(window.metadata.name, ensure_ascii=False)
    return f"blocked by maintenance window {quoted} until {window.spec.end_time}"


def _require_deployment(obj: Any, what: str = "") -> Deployment:
    if not isinstance(obj, Deployment):
        raise TypeError(f"expected a Deployment object{what} but got {type(obj).__name__}")
    return obj


@dataclass
class DeploymentCustomValidator:
    """Validates Deployments against the maintenance windows the client holds."""

    client: Any

    def validate_create(self, obj: Any) -> ValidationResult:
        """Refuse creation while any maintenance window is active."""
        deployment = _require_deployment(obj)
        logger.info("Validation for Deployment upon creation name=%s", deployment.name)
        try:
            windows = self.client.list()
        except Exception as exc:
            raise RuntimeError(f"unable to get maintenance window: {exc}") from exc
        for window in windows.items:
            if window.status.state is MaintenanceWindowState.ACTIVE:
                message = _blocked_message(window)
                logger.info(message)
                raise AdmissionDenied(message, [message])
        return ValidationResult()

    def validate_update(self, old_obj: Any, new_obj: Any) -> ValidationResult:
        """Accept every update of a Deployment."""
        deployment = _require_deployment(new_obj, " for the newObj")
        logger.info("Validation for Deployment upon update name=%s", deployment.name)
        return ValidationResult()

    def validate_delete(self, obj: Any) -> ValidationResult:
        """Accept every deletion of a Deployment."""
        deployment = _require_deployment(obj)
        logger.info("Validation for Deployment upon deletion name=%s", deployment.name)
        return ValidationResult()

    def handle(self) -> AdmissionResponse:
        """Deny while an active window exists, naming the first one found."""
        try:
            active = self.client.list({"status.state": "active"}).items
        except Exception as exc:
            return AdmissionResponse(
                allowed=False, message=str(exc), code=HTTPStatus.INTERNAL_SERVER_ERROR
            )
        if active:
            return AdmissionResponse(
                allowed=False, message=_blocked_message(active[0]), code=HTTPStatus.FORBIDDEN
            )
        return AdmissionResponse(allowed=True, message="no maintenance window active")