"""Host identity, CPU, RAM and disk readings via psutil."""

import getpass
import logging
import platform
import socket
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")
CPUINFO = Path("/proc/cpuinfo")


def _os_name():
    try:
        for line in OS_RELEASE.read_text(encoding="utf-8", errors="ignore").splitlines():
            if line.startswith("PRETTY_NAME="):
                return line.split("=", 1)[1].strip().strip('"')
    except OSError:
        pass
    return f"{platform.system()} {platform.release()}".strip() or "Unknown OS"


def _username():
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # no passwd entry and no USER/LOGNAME in the environment
        return "unknown"


def cpu_name():
    try:
        for line in CPUINFO.read_text(encoding="utf-8", errors="ignore").splitlines():
            if line.startswith("model name"):
                return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.processor() or "Unknown CPU"


def const_info():
    return f"User: {_username()}\nPC: {socket.gethostname()}\nOS: {_os_name()}\n"


def prime_cpu_percent():
    psutil.cpu_percent(interval=None)


def cpu_info(name=None, interval=None):
    # interval=None measures since the previous call
    usage = psutil.cpu_percent(interval=interval)
    return f"=== CPU Information ===\nName: {name or cpu_name()}\nUsage: {usage:.1f} %\n"


def disk_info():
    """RAM usage followed by one line per mounted partition."""
    lines = [f"RAM usage: {psutil.virtual_memory().percent:.1f} %"]
    for part in psutil.disk_partitions(all=False):
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except OSError:
            logger.debug("Skipping unreadable mount %s", part.mountpoint)
            continue
        if not usage.total:
            continue
        lines.append(f"{part.mountpoint} usage: {100.0 * usage.used / usage.total:.1f} %")
    return "\n".join(lines) + "\n"
