"""The text blocks shown by the overlay, sampled together."""

from dataclasses import dataclass

from . import host
from .gpu import GpuProbe, gpu_report

TITLE = "~~~ SysMon ~~~"


@dataclass(frozen=True)
class Snapshot:
    const_info: str
    cpu_info: str
    disk_info: str
    gpu_info: str


def take_snapshot(const_info, probe=None, cpu_name=None, cpu_interval=None):
    return Snapshot(
        const_info=const_info,
        cpu_info=host.cpu_info(cpu_name, cpu_interval),
        disk_info=host.disk_info(),
        gpu_info=gpu_report(probe or GpuProbe()),
    )


def render_text(snapshot):
    sections = [
        ("Const:", snapshot.const_info),
        ("CPU Info", snapshot.cpu_info),
        ("Disk Info", snapshot.disk_info),
        ("GPU Info", snapshot.gpu_info),
    ]
    parts = [TITLE, ""]
    for heading, body in sections:
        parts.append(heading)
        parts.append(body.rstrip("\n"))
        parts.append("")
    return "\n".join(parts).rstrip("\n")


def window_origin(settings, screen_width, window_width):
    """Top-left corner of the overlay for the configured corner and margin."""
    margin = int(settings.get('margin', 10))
    if settings.get('position') == 'Top Right':
        return screen_width - window_width - margin, margin
    return margin, margin
