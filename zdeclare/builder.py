from .dataclasses import ZPool, POOL_PROPERTIES


def split_groups(groups):
  return [dev for group in groups for dev in group.split()]


# spare, log and cache
def build_named(description: ZPool, name):
  groups = getattr(description, name)
  if groups:
    return [name] + split_groups(groups)
  return []


def handle_multi_arrays(prefix, groups):
  return [arg for group in groups for arg in [prefix] + group.split()]


def build_vdevs(description: ZPool):
  """
  Returns the vdev arguments of `zpool create`. Only one kind of data vdev
  is used: disks over mirrors over raidz groups.
  """
  if description.disk:
    return split_groups(description.disk)
  elif description.mirror:
    return handle_multi_arrays("mirror", description.mirror)
  elif description.raidz:
    return handle_multi_arrays(description.effective_raid_parity(), description.raidz)
  return []


def add_pool_properties(description: ZPool):
  properties = []
  for prop in POOL_PROPERTIES:
    value = getattr(description, prop)
    if value is not None and value != "":
      properties += ["-o", f"{prop}={value}"]
  return properties


def build_create_args(description: ZPool):
  return (["create"]
          + add_pool_properties(description)
          + [description.pool]
          + build_vdevs(description)
          + build_named(description, "spare")
          + build_named(description, "log")
          + build_named(description, "cache"))


def build_destroy_args(pool):
  return ["destroy", pool]


def build_set_args(prop, value, pool):
  return ["set", f"{prop}={value}", pool]


def build_get_args(prop, pool):
  return ["get", prop, pool]


def build_status_args(pool, linux):
  # full device paths on linux, so reported devices match the ones the pool was created with
  if linux:
    return ["status", "-P", pool]
  return ["status", pool]


def build_list_args():
  return ["list", "-H"]
