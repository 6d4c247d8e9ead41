"""Desktop overlay showing CPU, RAM, disk and GPU telemetry."""

__version__ = "0.1.0"

from .gpu import (
    FailureKind,
    GpuProbe,
    GpuSample,
    ProbeFailure,
    format_report,
    gpu_report,
)

__all__ = [
    "FailureKind",
    "GpuProbe",
    "GpuSample",
    "ProbeFailure",
    "format_report",
    "gpu_report",
    "__version__",
]
