from . import names
from .base import MetricsHook, NoOpMetricsHook, RecordingMetricsHook, timed

__all__ = [
    "MetricsHook",
    "NoOpMetricsHook",
    "RecordingMetricsHook",
    "names",
    "timed",
]
