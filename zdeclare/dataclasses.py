#pylint: disable=invalid-field-call

import shlex
from dataclasses import dataclass, field

from kpyutils.kiify import yaml_data, KiSymbol, KdStream


# marks a pool that does not exist. A pool without any groups is not absent.
ABSENT = KiSymbol("absent")

PRIMARY_CATEGORIES = ["disk", "mirror", "raidz"]
AUXILIARY_CATEGORIES = ["log", "spare", "cache"]
CATEGORIES = PRIMARY_CATEGORIES + AUXILIARY_CATEGORIES

POOL_PROPERTIES = ["ashift", "autoexpand", "failmode"]

DEFAULT_RAID_PARITY = "raidz1"



class ZDeclareError(Exception):
  """Base class for errors raised by zdeclare."""


class CommandFailed(ZDeclareError):
  """Raised when a command whose output is needed right away fails."""

  def __init__(self, command_args, returncode, errors=None):
    self.command_args = list(command_args)
    self.returncode = returncode
    self.errors = errors or []
    msg = f"command `{shlex.join(self.command_args)}` failed with return code {returncode}"
    if self.errors:
      msg += ": " + "; ".join(self.errors)
    super().__init__(msg)


class DeviceLookupError(ZDeclareError):
  """Raised when the parent device of a partition cannot be determined."""


class ImmutableFieldError(ZDeclareError):
  """Raised on attempts to change the vdev membership of an existing pool."""

  def __init__(self, fld, should, current):
    self.field = fld
    self.should = should
    self.current = current
    super().__init__(f"zpool {fld} can't be changed. should be {should}, currently is {current}")



@dataclass
class Topology:
  pool: object = ABSENT
  raid_parity: str = None
  groups: dict = field(default_factory=dict)

  @classmethod
  def absent(cls):
    return cls(pool=ABSENT)

  def exists(self):
    return self.pool != ABSENT

  def get(self, category):
    return self.groups.get(category)

  def prepend(self, category, group):
    self.groups.setdefault(category, []).insert(0, group)

  def __kiify__(self, kd_stream: KdStream):
    kd_stream.print_raw("Topology")
    kd_stream.stream.indent()
    kd_stream.print_property(self, "pool")
    kd_stream.print_property(self, "raid_parity", hide_if_empty=True)
    for category in CATEGORIES:
      if category in self.groups:
        kd_stream.newline()
        kd_stream.print_raw(f"{category}: ")
        kd_stream.print_obj(self.groups[category])
    kd_stream.stream.dedent()



def property_string(value):
  if value is None:
    return None
  if isinstance(value, bool):
    return "on" if value else "off"
  return str(value)


def group_list(value):
  if value is None:
    return None
  if isinstance(value, str):
    return [value]
  return [str(v) for v in value]


@yaml_data
class ZPool:
  name: str = None
  pool: str = None
  ensure: str = "present"

  disk: list = None
  mirror: list = None
  raidz: list = None
  log: list = None
  spare: list = None
  cache: list = None

  raid_parity: str = None

  ashift: str = None
  autoexpand: str = None
  failmode: str = None

  notes: str = None

  def __post_init__(self):
    if self.name is None and self.pool is None:
      raise ValueError("misconfiguration: zpool without `name`")
    if self.name is None:
      self.name = self.pool
    if self.pool is None:
      self.pool = self.name
    if self.ensure not in ("present", "absent"):
      raise ValueError(f"misconfiguration: zpool {self.name}: `ensure` must either be `present` or `absent`, not `{self.ensure}`")
    for category in CATEGORIES:
      setattr(self, category, group_list(getattr(self, category)))
    for prop in POOL_PROPERTIES:
      setattr(self, prop, property_string(getattr(self, prop)))

  def effective_raid_parity(self):
    return self.raid_parity if self.raid_parity else DEFAULT_RAID_PARITY



@yaml_data
class ZDeclare:
  enable_commands: bool = True
  log_level: str = "info"

  content: list = field(default_factory=list)
  notes: str = None

  def find_pool(self, name):
    for entity in self.content:
      if isinstance(entity, ZPool) and name in (entity.name, entity.pool):
        return entity
    return None
