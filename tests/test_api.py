import json

import pytest

from mwindow.api import (
    GROUP_VERSION,
    GroupVersion,
    MaintenanceWindow,
    MaintenanceWindowList,
    MaintenanceWindowSpec,
    MaintenanceWindowState,
    MaintenanceWindowStatus,
    ObjectMeta,
)


def _window(name="mw-test-resource", state=None):
    return MaintenanceWindow(
        metadata=ObjectMeta(name=name, namespace="maintenance-window-system"),
        spec=MaintenanceWindowSpec(
            start_time="2025-06-19T01:00:00Z", end_time="2025-06-25T03:00:00Z"
        ),
        status=MaintenanceWindowStatus(state=state),
    )


def test_group_version_api_version():
    assert GROUP_VERSION.api_version() == "maintenanceoperator.io.maintenanceoperator.io/v1alpha1"


def test_core_group_has_bare_version():
    assert GroupVersion(group="", version="v1").api_version() == "v1"


def test_state_values():
    assert MaintenanceWindowState("active") is MaintenanceWindowState.ACTIVE
    assert MaintenanceWindowState.EXPIRED.value == "expired"
    assert MaintenanceWindowState.INACTIVE.value == "inactive"


def test_to_dict_uses_wire_names():
    data = _window(state=MaintenanceWindowState.ACTIVE).to_dict()
    assert data["kind"] == "MaintenanceWindow"
    assert data["apiVersion"] == GROUP_VERSION.api_version()
    assert data["spec"] == {
        "startTime": "2025-06-19T01:00:00Z",
        "endTime": "2025-06-25T03:00:00Z",
    }
    assert data["status"] == {"state": "active"}


def test_empty_fields_are_omitted():
    data = MaintenanceWindow().to_dict()
    assert data["spec"] == {}
    assert data["status"] == {}
    assert data["metadata"] == {}


@pytest.mark.parametrize("state", [None, *MaintenanceWindowState])
def test_window_round_trip(state):
    window = _window(state=state)
    assert MaintenanceWindow.from_dict(window.to_dict()) == window


def test_window_round_trip_through_json():
    window = _window(state=MaintenanceWindowState.EXPIRED)
    text = json.dumps(window.to_dict())
    assert MaintenanceWindow.from_dict(json.loads(text)) == window


def test_list_round_trip():
    windows = MaintenanceWindowList(items=[_window("a"), _window("b", MaintenanceWindowState.ACTIVE)])
    data = windows.to_dict()
    assert data["kind"] == "MaintenanceWindowList"
    assert len(data["items"]) == 2
    assert MaintenanceWindowList.from_dict(data) == windows


def test_empty_list_keeps_items_key():
    assert MaintenanceWindowList().to_dict()["items"] == []


def test_unknown_state_rejected():
    data = _window().to_dict()
    data["status"] = {"state": "paused"}
    with pytest.raises(ValueError):
        MaintenanceWindow.from_dict(data)


def test_wrong_kind_rejected():
    data = _window().to_dict()
    data["kind"] = "Deployment"
    with pytest.raises(ValueError):
        MaintenanceWindow.from_dict(data)


def test_non_string_field_rejected():
    data = _window().to_dict()
    data["spec"]["startTime"] = 12
    with pytest.raises(ValueError):
        MaintenanceWindow.from_dict(data)