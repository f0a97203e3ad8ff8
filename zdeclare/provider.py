from dataclasses import dataclass

from .logging import log
from .util import myexec
from .dataclasses import Topology, ZPool, CATEGORIES, CommandFailed, DeviceLookupError, ImmutableFieldError
from .topology import status_entries, parse_topology
from .properties import UNAVAILABLE, parse_property, parse_pool_list
from .builder import build_create_args, build_destroy_args, build_set_args, build_get_args, build_status_args, build_list_args
from . import commands as commands
from . import config as config



def zpool(args):
  return [config.zpool_command] + args


def string_command(args):
  rcode, _, response, errors = myexec(args)
  if rcode != 0:
    raise CommandFailed(args, rcode, errors)
  return "\n".join(response)



# `zpool status` fails for pools that do not exist, which is not an error here
def get_zpool_status(pool):
  rcode, _, response, _ = myexec(zpool(build_status_args(pool, config.is_linux())))
  if rcode != 0:
    log.debug(f"no status for zpool {pool}, assuming it does not exist")
    return None
  return "\n".join(response)


def get_zpool_property(pool, prop):
  return string_command(zpool(build_get_args(prop, pool)))


def list_zpools():
  return string_command(zpool(build_list_args()))


def lookup_parent_device(dev_path):
  args = ["lsblk", "-p", "-no", "pkname", dev_path]
  rcode, _, response, errors = myexec(args)
  parent = response[0].strip() if response else ""
  if rcode != 0 or parent == "":
    raise DeviceLookupError(f"could not determine the parent device of {dev_path}: `lsblk` returned {rcode} {' '.join(errors)}".rstrip())
  return parent



@dataclass
class TopologyCacheEntry:
  pool: str
  topology: Topology = None
  valid: bool = False


def find_or_create_cache(pool):
  if config.cache_dict is None:
    config.cache_dict = dict()
  identifier = f"TopologyCacheEntry|pool:{pool}"
  cache = config.cache_dict.get(identifier)
  if cache is None:
    cache = TopologyCacheEntry(pool)
    config.cache_dict[identifier] = cache
  return cache


def invalidate_cache(pool):
  cache = find_or_create_cache(pool)
  if cache.valid:
    log.debug(f"zpool {pool}: dropping cached topology")
  cache.valid = False
  cache.topology = None



class ZPoolProvider:

  def __init__(self, description: ZPool):
    self.description = description

  @property
  def pool(self):
    return self.description.pool

  @classmethod
  def instances(cls):
    return [cls(ZPool(name=name)) for name in parse_pool_list(config.list_zpools())]

  def current_pool(self):
    cache = find_or_create_cache(self.pool)
    if not cache.valid:
      status = config.get_zpool_status(self.pool)
      cache.topology = parse_topology(status_entries(status), linux=config.is_linux())
      cache.valid = True
    return cache.topology

  def flush(self):
    invalidate_cache(self.pool)

  def exists(self):
    return self.current_pool().exists()


  def mutation_handler(self, unavailable_ok=False):
    def handle(cmd, returncode, _results, errors):
      # the pool changed (or might have), the cached topology is stale now
      self.flush()
      if returncode != 0:
        if unavailable_ok:
          log.warning(f"zpool {self.pool}: `{cmd.command}` failed, property not available on this platform ({UNAVAILABLE})")
        else:
          log.error(f"command `{cmd.command}` failed: \n\t" + "\n\t".join(errors))
    return handle

  def create(self):
    log.info(f"zpool {self.pool}: creating")
    return commands.add_command(zpool(build_create_args(self.description)), self.mutation_handler(), unless_redundant=True)

  def destroy(self):
    log.info(f"zpool {self.pool}: destroying")
    return commands.add_command(zpool(build_destroy_args(self.pool)), self.mutation_handler(), unless_redundant=True)

  def get_property(self, prop):
    return parse_property(config.get_zpool_property(self.pool, prop), self.pool)

  def set_property(self, prop, value, unavailable_ok=False):
    return commands.add_command(zpool(build_set_args(prop, value, self.pool)), self.mutation_handler(unavailable_ok), unless_redundant=True)


  def get(self, fld):
    return accessors_for(fld)[0](self)

  def set(self, fld, value):
    return accessors_for(fld)[1](self, value)



def make_topology_accessors(fld):
  def getter(provider):
    return provider.current_pool().get(fld)
  def setter(provider, should):
    raise ImmutableFieldError(fld, should, provider.current_pool().get(fld))
  return getter, setter


def make_property_accessors(prop):
  def getter(provider):
    return provider.get_property(prop)
  def setter(provider, should):
    return provider.set_property(prop, should)
  return getter, setter


# ashift only exists on linux, elsewhere `zpool get` fails
def get_ashift(provider):
  try:
    return provider.get_property("ashift")
  except CommandFailed as ex:
    log.verbose(f"zpool {provider.pool}: ashift not available: {ex}")
    return UNAVAILABLE

def set_ashift(provider, should):
  return provider.set_property("ashift", should, unavailable_ok=True)


FIELD_ACCESSORS = {fld: make_topology_accessors(fld) for fld in CATEGORIES}
FIELD_ACCESSORS["ashift"] = (get_ashift, set_ashift)
FIELD_ACCESSORS["autoexpand"] = make_property_accessors("autoexpand")
FIELD_ACCESSORS["failmode"] = make_property_accessors("failmode")


def accessors_for(fld):
  if fld not in FIELD_ACCESSORS:
    raise ValueError(f"unknown zpool field: {fld}. Must be one of: {', '.join(FIELD_ACCESSORS)}")
  return FIELD_ACCESSORS[fld]



config.get_zpool_status = get_zpool_status
config.get_zpool_property = get_zpool_property
config.list_zpools = list_zpools
config.lookup_parent_device = lookup_parent_device
