import pickle
from unittest.mock import Mock

import pytest
from prometheus_client import REGISTRY

from assessor.shared.telemetry import Telemetry, measure_time


def _duration_count(component: str, method: str) -> float:
    value = REGISTRY.get_sample_value(
        "assessor_method_duration_seconds_count",
        {"component": component, "method": method},
    )
    return value or 0.0


class Worker:
    def __init__(self):
        self.telemetry = Telemetry("Worker")

    @measure_time("do_work")
    def do_work(self, value):
        return value * 2

    @measure_time("fail")
    def fail(self):
        raise ValueError("nope")


@measure_time("helper", component="Helpers")
def helper(x):
    return x + 1


def test_method_calls_are_timed_and_logged():
    worker = Worker()
    worker.telemetry.logger = Mock()
    before = _duration_count("Worker", "do_work")

    assert worker.do_work(21) == 42

    assert _duration_count("Worker", "do_work") == before + 1
    worker.telemetry.logger.info.assert_called_once()


def test_failures_are_logged_and_reraised():
    worker = Worker()
    worker.telemetry.logger = Mock()

    with pytest.raises(ValueError):
        worker.fail()

    worker.telemetry.logger.error.assert_called_once()


def test_free_functions_use_fixed_component():
    before = _duration_count("Helpers", "helper")

    assert helper(1) == 2
    assert _duration_count("Helpers", "helper") == before + 1


def test_record_fallback_counts_by_reason():
    before = REGISTRY.get_sample_value("assessor_scoring_fallbacks_total", {"reason": "test"}) or 0.0

    Telemetry.record_fallback("test")

    after = REGISTRY.get_sample_value("assessor_scoring_fallbacks_total", {"reason": "test"})
    assert after == before + 1


def test_trace_id_is_set_per_action():
    trace_id = Telemetry.start_trace()

    assert len(trace_id) == 8
    assert Telemetry.get_trace_id() == trace_id


def test_telemetry_is_pickle_safe():
    restored = pickle.loads(pickle.dumps(Telemetry("Pickled")))

    assert restored.component == "Pickled"
    assert restored.logger.name == "Pickled"
