"""GPU telemetry: try each vendor tool in turn and keep the first answer."""

import enum
import logging
import math
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

NVIDIA_SMI_ARGS = [
    "nvidia-smi",
    "--query-gpu=name,temperature.gpu,utilization.gpu,memory.used,memory.total",
    "--format=csv,noheader,nounits",
]
RADEON_SMI_ARGS = ["radeon-smi"]
WMI_ARGS = [
    "powershell",
    "-NoProfile",
    "-Command",
    "Get-WmiObject win32_videocontroller | Select-Object Name, AdapterRAM | Format-List",
]

AMD_FALLBACK_NAME = "AMD Radeon"
UNKNOWN_DEVICE = "Unknown device"
NOT_AVAILABLE = "N/A"
NEEDS_VENDOR_TOOL = "N/A (requires nvidia-smi or radeon-smi)"
ALL_FAILED = "All GPU detection methods failed"


# --- Result types ---
@dataclass(frozen=True)
class GpuSample:
    name: str
    temperature: str
    utilization: str
    memory_used: str
    memory_total: str


class FailureKind(enum.Enum):
    TOOL_NOT_FOUND = "tool not found"
    TOOL_ERROR = "tool exited with error"
    PARSE_ERROR = "unexpected output"


@dataclass(frozen=True)
class ProbeFailure:
    source: str
    kind: FailureKind
    detail: str = ""

    def __str__(self):
        return self.detail or f"{self.source}: {self.kind.value}"


ProbeOutcome = Union[GpuSample, ProbeFailure]


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str


def run_command(args: Sequence[str]) -> CommandResult:
    """Run ``args`` to completion and capture stdout as text.

    Raises ``OSError`` (usually ``FileNotFoundError``) if the executable
    cannot be started.
    """
    proc = subprocess.run(
        list(args),
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        errors="replace",
        check=False,
    )
    return CommandResult(proc.returncode, proc.stdout or "")


Runner = Callable[[Sequence[str]], CommandResult]


def _invoke(source, args, runner):
    """Run a probe command; return its stdout, or a ProbeFailure."""
    try:
        result = runner(args)
    except OSError as exc:
        return ProbeFailure(source, FailureKind.TOOL_NOT_FOUND, f"{source} failed or not installed ({exc})")
    if result.returncode != 0:
        return ProbeFailure(source, FailureKind.TOOL_ERROR, f"{source} exited with status {result.returncode}")
    return result.stdout


def _value_after_colon(line):
    parts = line.split(":")
    if len(parts) < 2:
        return None
    return parts[1].strip()


def _to_float(text):
    try:
        value = float(text.strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


# --- Adapters ---
def probe_nvidia_smi(runner: Runner = run_command) -> ProbeOutcome:
    out = _invoke("nvidia-smi", NVIDIA_SMI_ARGS, runner)
    if isinstance(out, ProbeFailure):
        return out

    # One line per GPU; only the first device is reported.
    line = next((ln for ln in out.splitlines() if ln.strip()), "")
    parts = [p.strip() for p in line.split(",")]
    if len(parts) < 5:
        return ProbeFailure("nvidia-smi", FailureKind.PARSE_ERROR,
                            f"nvidia-smi returned {len(parts)} fields, expected 5")

    temp = _to_float(parts[1])
    util = _to_float(parts[2])
    return GpuSample(
        name=parts[0],
        temperature=f"{temp:.1f} °C",
        utilization=f"{util:.1f} %",
        memory_used=f"{parts[3]} MB",
        memory_total=f"{parts[4]} MB",
    )


def _radeon_temperature(value):
    value = value.rstrip("C").rstrip("°").strip()
    return f"{value}°C"


# (predicate, field, transform), first match wins per line
RADEON_RULES = [
    (lambda line: "GPU" in line and "model" in line, "name", str),
    (lambda line: "Temperature" in line, "temperature", _radeon_temperature),
    (lambda line: "GPU Load" in line, "utilization", str),
]


def probe_radeon_smi(runner: Runner = run_command) -> ProbeOutcome:
    out = _invoke("radeon-smi", RADEON_SMI_ARGS, runner)
    if isinstance(out, ProbeFailure):
        return out

    fields = {"name": "", "temperature": "", "utilization": ""}
    for line in out.splitlines():
        for matches, field, transform in RADEON_RULES:
            if matches(line):
                value = _value_after_colon(line)
                if value is not None:
                    fields[field] = transform(value)
                break

    return GpuSample(
        name=fields["name"] or AMD_FALLBACK_NAME,
        temperature=fields["temperature"],
        utilization=fields["utilization"],
        # radeon-smi does not report memory
        memory_used="",
        memory_total="",
    )


def probe_wmi(runner: Runner = run_command) -> ProbeOutcome:
    out = _invoke("wmi", WMI_ARGS, runner)
    if isinstance(out, ProbeFailure):
        return out

    name = ""
    memory_total = ""
    for line in out.splitlines():
        value = _value_after_colon(line)
        if value is None:
            continue
        if "Name" in line:
            name = value
        elif "AdapterRAM" in line:
            # byte counts are unsigned; anything else counts as zero
            size = int(value) if value.isascii() and value.isdigit() else 0
            # WMI reports decimal megabytes
            memory_total = f"{size // 1_000_000} MB"

    return GpuSample(
        name=name or UNKNOWN_DEVICE,
        temperature=NEEDS_VENDOR_TOOL,
        utilization=NOT_AVAILABLE,
        memory_used=NOT_AVAILABLE,
        memory_total=memory_total or NOT_AVAILABLE,
    )


DEFAULT_ADAPTERS = (probe_nvidia_smi, probe_radeon_smi, probe_wmi)


# --- Selector ---
class GpuProbe:
    """Ordered fallback over the GPU adapters."""

    def __init__(self, adapters=DEFAULT_ADAPTERS, runner: Runner = run_command):
        self.adapters = list(adapters)
        self.runner = runner

    def sample(self) -> ProbeOutcome:
        failures: List[ProbeFailure] = []
        for adapter in self.adapters:
            outcome = adapter(self.runner)
            if isinstance(outcome, GpuSample):
                return outcome
            logger.debug("GPU probe failed: %s (%s)", outcome, outcome.kind.value)
            failures.append(outcome)
        logger.info("No GPU source available, tried: %s", ", ".join(f.source for f in failures))
        kind = failures[-1].kind if failures else FailureKind.TOOL_NOT_FOUND
        return ProbeFailure("all", kind, ALL_FAILED)


# --- Formatting ---
def format_report(outcome: ProbeOutcome) -> str:
    if isinstance(outcome, ProbeFailure):
        return f"Error: {outcome}"
    return (
        "=== GPU Information ===\n"
        f"Name: {outcome.name}\n"
        f"Temperature: {outcome.temperature}\n"
        f"Usage: {outcome.utilization}\n"
        f"Memory Used: {outcome.memory_used}\n"
        f"Memory Total: {outcome.memory_total}\n"
    )


def gpu_report(probe: Optional[GpuProbe] = None) -> str:
    """Produce the current GPU report text."""
    return format_report((probe or GpuProbe()).sample())
