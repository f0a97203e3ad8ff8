#!/bin/python3
# ******************************************************************************
# - *-coding: utf-8 -*-
# (c) copyright 2025 Alexander Poeschl
# All rights reserved.
# ******************************************************************************
# @file test_devices.py
# @brief Pytests for resolving partition paths to their disks
# ******************************************************************************

import pytest

from zdeclare.dataclasses import DeviceLookupError
from zdeclare.devices import normalize_device, is_partition_path
import zdeclare.provider as provider
import zdeclare.config as config



@pytest.fixture(autouse=True)
def real_lookup():
  config.lookup_parent_device = provider.lookup_parent_device


def fake_exec(returncode, response, errors=None):
  calls = []
  def myexec(args):
    calls.append(args)
    return returncode, response + (errors or []), response, errors or []
  return myexec, calls


@pytest.mark.parametrize("path", [
  "/dev/sda1",
  "/dev/vdb1",
  "/dev/nvme0n1p1",
  "/dev/nvme12n3p1",
  "/dev/disk/by-id/ata-Samsung_SSD_860_EVO_1TB_S3Z9NB0K000000X-part1",
])
def test_partition_paths(path):
  assert is_partition_path(path)


@pytest.mark.parametrize("path", [
  "/dev/sda",
  "/dev/sda2",
  "/dev/nvme0n1",
  "/dev/nvme0n1p2",
  "/dev/disk/by-id/ata-Samsung_SSD_860_EVO_1TB_S3Z9NB0K000000X",
  "/dev/disk/by-id/ata-Samsung_SSD_860_EVO_1TB_S3Z9NB0K000000X-part2",
  "/tmp/zdeclare/dsk1",
  "c0t0d0s1",
])
def test_other_paths(path):
  assert not is_partition_path(path)


@pytest.mark.parametrize("path", ["/dev/sda1", "/dev/nvme0n1p1", "/dev/sda", "raidz3-0"])
def test_unchanged_when_not_linux(monkeypatch, path):
  myexec, calls = fake_exec(0, ["/dev/sdz"])
  monkeypatch.setattr(provider, "myexec", myexec)
  assert normalize_device(path, linux=False) == path
  assert calls == []


def test_whole_disk_unchanged_on_linux(monkeypatch):
  myexec, calls = fake_exec(0, ["/dev/sdz"])
  monkeypatch.setattr(provider, "myexec", myexec)
  assert normalize_device("/dev/sda", linux=True) == "/dev/sda"
  assert calls == []


def test_partition_resolved_on_linux(monkeypatch):
  myexec, calls = fake_exec(0, ["/dev/nvme0n1 "])
  monkeypatch.setattr(provider, "myexec", myexec)
  assert normalize_device("/dev/nvme0n1p1", linux=True) == "/dev/nvme0n1"
  assert calls == [["lsblk", "-p", "-no", "pkname", "/dev/nvme0n1p1"]]


def test_failed_lookup_raises(monkeypatch):
  myexec, _ = fake_exec(32, [], ["lsblk: /dev/sdq1: not a block device"])
  monkeypatch.setattr(provider, "myexec", myexec)
  with pytest.raises(DeviceLookupError, match="/dev/sdq1"):
    normalize_device("/dev/sdq1", linux=True)


def test_empty_lookup_raises(monkeypatch):
  myexec, _ = fake_exec(0, [])
  monkeypatch.setattr(provider, "myexec", myexec)
  with pytest.raises(DeviceLookupError):
    normalize_device("/dev/sdq1", linux=True)
