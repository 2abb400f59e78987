from __future__ import annotations

from assessmenttasks.core.logging import service_identity


def test_service_identity_stamps_events() -> None:
    add_identity = service_identity("assessmenttasks", "test")

    event = add_identity(None, "info", {"event": "service_startup"})

    assert event == {
        "event": "service_startup",
        "service": "assessmenttasks",
        "environment": "test",
    }


def test_service_identity_keeps_explicit_values() -> None:
    add_identity = service_identity("assessmenttasks", "test")

    event = add_identity(None, "info", {"event": "x", "service": "worker"})

    assert event["service"] == "worker"
    assert event["environment"] == "test"
