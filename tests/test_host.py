from collections import namedtuple

import pytest

from sysoverlay import host

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")
Memory = namedtuple("Memory", "total available percent used free")


@pytest.fixture
def fake_psutil(monkeypatch):
    usages = {
        "/": Usage(100, 25, 75, 25.0),
        "/boot": Usage(0, 0, 0, 0.0),
    }

    def disk_usage(path):
        if path not in usages:
            raise PermissionError(13, "Permission denied", path)
        return usages[path]

    monkeypatch.setattr(host.psutil, "virtual_memory", lambda: Memory(8, 4, 43.21, 4, 4))
    monkeypatch.setattr(host.psutil, "cpu_percent", lambda interval=None: 12.345)
    monkeypatch.setattr(host.psutil, "disk_partitions", lambda all=False: [
        Partition("/dev/sda1", "/", "ext4", "rw"),
        Partition("/dev/sda2", "/boot", "vfat", "rw"),
        Partition("/dev/sdb1", "/mnt/locked", "ext4", "rw"),
    ])
    monkeypatch.setattr(host.psutil, "disk_usage", disk_usage)


def test_disk_info(fake_psutil):
    assert host.disk_info() == "RAM usage: 43.2 %\n/ usage: 25.0 %\n"


def test_cpu_info(fake_psutil):
    text = host.cpu_info("Test CPU @ 3.0GHz")
    assert text == "=== CPU Information ===\nName: Test CPU @ 3.0GHz\nUsage: 12.3 %\n"


def test_cpu_name_from_cpuinfo(tmp_path, monkeypatch):
    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text("processor\t: 0\nmodel name\t: Example Ryzen 7\nflags\t: fpu\n")
    monkeypatch.setattr(host, "CPUINFO", cpuinfo)
    assert host.cpu_name() == "Example Ryzen 7"


def test_cpu_name_fallback(tmp_path, monkeypatch):
    monkeypatch.setattr(host, "CPUINFO", tmp_path / "missing")
    monkeypatch.setattr(host.platform, "processor", lambda: "")
    assert host.cpu_name() == "Unknown CPU"


def test_const_info(tmp_path, monkeypatch):
    os_release = tmp_path / "os-release"
    os_release.write_text('NAME="Ubuntu"\nPRETTY_NAME="Ubuntu 24.04 LTS"\n')
    monkeypatch.setattr(host, "OS_RELEASE", os_release)
    monkeypatch.setattr(host.getpass, "getuser", lambda: "alice")
    monkeypatch.setattr(host.socket, "gethostname", lambda: "workstation")
    assert host.const_info() == "User: alice\nPC: workstation\nOS: Ubuntu 24.04 LTS\n"


def test_const_info_without_os_release(tmp_path, monkeypatch):
    monkeypatch.setattr(host, "OS_RELEASE", tmp_path / "missing")
    monkeypatch.setattr(host.platform, "system", lambda: "Windows")
    monkeypatch.setattr(host.platform, "release", lambda: "11")
    monkeypatch.setattr(host.getpass, "getuser", lambda: "bob")
    monkeypatch.setattr(host.socket, "gethostname", lambda: "pc")
    assert host.const_info().splitlines()[2] == "OS: Windows 11"
