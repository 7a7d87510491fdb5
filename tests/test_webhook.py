import pytest

from mwindow.api import (
    MaintenanceWindow,
    MaintenanceWindowSpec,
    MaintenanceWindowState,
    MaintenanceWindowStatus,
    ObjectMeta,
)
from mwindow.controller import InMemoryClient
from mwindow.webhook import (
    AdmissionDenied,
    AdmissionResponse,
    Deployment,
    DeploymentCustomValidator,
    ValidationResult,
)

END_TIME = "2025-06-25T03:00:00Z"


def _window(name, state=None):
    return MaintenanceWindow(
        metadata=ObjectMeta(name=name, namespace="maintenance-window-system"),
        spec=MaintenanceWindowSpec(start_time="2025-06-19T01:00:00Z", end_time=END_TIME),
        status=MaintenanceWindowStatus(state=state),
    )


@pytest.fixture
def store():
    return InMemoryClient()


@pytest.fixture
def validator(store):
    return DeploymentCustomValidator(client=store)


class _BrokenClient:
    def list(self, field_selector=None):
        raise RuntimeError("connection refused")


def test_create_allowed_without_windows(validator):
    assert validator.validate_create(Deployment(name="web")) == ValidationResult()


def test_create_allowed_with_inactive_windows(store, validator):
    store.create(_window("later", MaintenanceWindowState.INACTIVE))
    store.create(_window("old", MaintenanceWindowState.EXPIRED))
    assert validator.validate_create(Deployment(name="web")).warnings == []


def test_create_blocked_by_active_window(store, validator):
    store.create(_window("mw-test-resource", MaintenanceWindowState.ACTIVE))
    with pytest.raises(AdmissionDenied) as info:
        validator.validate_create(Deployment(name="web"))
    expected = f'blocked by maintenance window "mw-test-resource" until {END_TIME}'
    assert info.value.message == expected
    assert info.value.warnings == [expected]


def test_create_rejects_other_objects(validator):
    with pytest.raises(TypeError, match="expected a Deployment object"):
        validator.validate_create(_window("x"))


def test_create_reports_list_failure():
    validator = DeploymentCustomValidator(client=_BrokenClient())
    with pytest.raises(RuntimeError, match="unable to get maintenance window"):
        validator.validate_create(Deployment(name="web"))


def test_update_accepts_deployments(store, validator):
    store.create(_window("busy", MaintenanceWindowState.ACTIVE))
    result = validator.validate_update(Deployment(), Deployment(name="web"))
    assert result.warnings == []


def test_update_rejects_other_objects(validator):
    with pytest.raises(TypeError, match="for the newObj"):
        validator.validate_update(Deployment(), "not a deployment")


def test_delete_accepts_and_checks_type(validator):
    assert validator.validate_delete(Deployment(name="web")).warnings == []
    with pytest.raises(TypeError):
        validator.validate_delete(42)


def test_handle_allows_without_active_window(store, validator):
    store.create(_window("old", MaintenanceWindowState.EXPIRED))
    assert validator.handle() == AdmissionResponse(
        allowed=True, message="no maintenance window active", code=200
    )


def test_handle_denies_with_first_active_window(store, validator):
    store.create(_window("b", MaintenanceWindowState.ACTIVE))
    store.create(_window("a", MaintenanceWindowState.ACTIVE))
    response = validator.handle()
    assert response.allowed is False
    assert response.code == 403
    assert response.message == f'blocked by maintenance window "a" until {END_TIME}'


def test_handle_reports_errors():
    response = DeploymentCustomValidator(client=_BrokenClient()).handle()
    assert response.allowed is False
    assert response.code == 500
    assert response.message == "connection refused"