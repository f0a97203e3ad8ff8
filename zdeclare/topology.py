import re

from .dataclasses import Topology
from .devices import normalize_device
from .logging import log


# group keywords as they appear in `zpool status`, and the category the
# devices listed below them belong to
BOUNDARY_KEYWORDS = {
  "spares": "spare",
  "logs": "log",
  "cache": "cache",
}

BOUNDARY_PREFIXES = [
  (re.compile(r'^mirror'), "mirror", None),
  (re.compile(r'^raidz1'), "raidz", None),
  (re.compile(r'^raidz2'), "raidz", "raidz2"),
]


def boundary_for(entry):
  """Returns (category, raid_parity) if the entry starts a group, else None."""
  if entry in BOUNDARY_KEYWORDS:
    return BOUNDARY_KEYWORDS[entry], None
  for regex, category, parity in BOUNDARY_PREFIXES:
    if regex.match(entry):
      return category, parity
  return None


def status_entries(status_text):
  """
  Reduces `zpool status` output to the first token of every tab-indented
  line (the config section), without the `NAME STATE ...` header. The first
  remaining entry is the pool name.
  """
  if not status_text:
    return []
  entries = [line.strip().split()[0] for line in status_text.splitlines()
             if line.startswith("\t") and line.strip() != ""]
  return entries[1:]


def parse_topology(entries, linux=False):
  """
  Builds the Topology from the entries produced by `status_entries`.

  The scan runs from the last entry to the first. Devices are collected
  until the keyword of the group they belong to shows up, so a group keyword
  always closes the devices listed after it. Devices listed before any
  keyword form a single `disk` group.

  Unknown keywords (`raidz3-0`, `special`, `dedup`, ...) are taken for
  device paths.
  """
  if not entries:
    return Topology.absent()

  topology = Topology(pool=entries[0])
  devices = entries[1:]
  pending = []

  def flush(category):
    group = " ".join(reversed(pending))
    log.trace(f"{topology.pool}: {category} group `{group}`")
    topology.prepend(category, group)
    pending.clear()

  for index in range(len(devices) - 1, -1, -1):
    entry = devices[index]
    boundary = boundary_for(entry)
    if boundary is not None:
      category, parity = boundary
      if parity is not None:
        topology.raid_parity = parity
      flush(category)
      continue

    pending.append(normalize_device(entry, linux))

    # a top-level device without any group keyword above it
    if index == 0:
      flush("disk")

  return topology
