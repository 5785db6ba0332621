from __future__ import annotations

import pytest

from hangul_engine.runtime import telemetry


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.preset_config("verbose")


def test_configure_takes_config_or_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.env_config(), preset="development")


def test_loggers_are_cached_per_name() -> None:
    first = telemetry.get_logger("hangul_engine.tests")

    assert telemetry.get_logger("hangul_engine.tests") is first


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("tests.event", level="loud")


def test_span_collects_metadata_and_reraises() -> None:
    with telemetry.span("tests::ok", metadata={"key": "r"}) as handle:
        handle.add_metadata("hits", 3)
    assert handle.metadata == {"key": "r", "hits": "3"}

    with pytest.raises(RuntimeError):
        with telemetry.span("tests::boom", component=True):
            raise RuntimeError("boom")
