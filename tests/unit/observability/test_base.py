from unittest.mock import Mock

import pytest

from rosetta.observability import NoOpMetricsHook, RecordingMetricsHook, timed


class TestRecordingMetricsHook:
    def test_counters_accumulate(self) -> None:
        hook = RecordingMetricsHook()

        hook.increment("elements")
        hook.increment("elements", 4)

        assert hook.counters == {"elements": 5}

    def test_labels_are_part_of_the_key(self) -> None:
        hook = RecordingMetricsHook()

        hook.increment("diagnostics", 2, labels={"severity": "warning"})
        hook.increment("diagnostics", 1, labels={"severity": "error"})

        assert hook.counters == {
            "diagnostics{severity=warning}": 2,
            "diagnostics{severity=error}": 1,
        }

    def test_latencies_and_gauges(self) -> None:
        hook = RecordingMetricsHook()

        hook.record_latency("duration", 1.5)
        hook.record_latency("duration", 2.5)
        hook.record_gauge("depth", 3)
        hook.record_gauge("depth", 4)

        assert hook.latencies == {"duration": [1.5, 2.5]}
        assert hook.gauges == {"depth": 4}


class TestTimed:
    def test_records_latency_under_name(self) -> None:
        hook = Mock()

        with timed(hook, "block_duration"):
            pass

        hook.record_latency.assert_called_once()
        name, value = hook.record_latency.call_args.args
        assert name == "block_duration"
        assert value >= 0

    def test_records_latency_when_block_raises(self) -> None:
        hook = RecordingMetricsHook()

        with pytest.raises(RuntimeError):
            with timed(hook, "failing"):
                raise RuntimeError("boom")

        assert len(hook.latencies["failing"]) == 1

    def test_noop_hook_accepts_everything(self) -> None:
        hook = NoOpMetricsHook()

        with timed(hook, "ignored"):
            hook.increment("x", labels={"a": "b"})
            hook.record_gauge("y", 1.0)
