import sys
import shlex

from tabulate import tabulate

from .logging import log
from .dataclasses import ZDeclare, ZPool, ZDeclareError, CATEGORIES, POOL_PROPERTIES, DEFAULT_RAID_PARITY
from .provider import ZPoolProvider, zpool
from .properties import UNAVAILABLE, parse_pool_list
from .builder import build_create_args, split_groups
from .util import load_yaml_config, require_path
from . import commands as commands
from . import config as config
from kpyutils.kiify import KdStream, to_yes
from kpyutils.cli import confirm



def init_config(config_path):
  config.config_path = config_path
  require_path(config.config_path, "config file does not exist")
  root = load_yaml_config(config.config_path)
  if not isinstance(root, ZDeclare):
    raise ValueError(f"{config_path}: the document must be tagged `!ZDeclare`")
  config.config_root = root
  if not config.log_level_from_cli:
    config.set_log_level(root.log_level)
  config.commands_enabled = bool(root.enable_commands)
  config.cache_dict = dict()
  log.info(f"command execution enabled: {to_yes(config.commands_enabled)}")
  return root


def find_configured_pool(name):
  entity = config.config_root.find_pool(name)
  if entity is None:
    raise ValueError(f"zpool {name} not configured in {config.config_path}")
  return entity



def is_in_sync(fld, current, should):
  # status reports top-level disks as a single group
  if fld == "disk":
    return split_groups(current or []) == split_groups(should or [])
  if fld in CATEGORIES:
    return (current or []) == (should or [])
  return current == should


def reconcile(description: ZPool):
  """
  Queues the commands that bring the pool in line with its description.
  Raises ImmutableFieldError if the vdev layout of an existing pool differs.
  """
  provider = ZPoolProvider(description)
  exists = provider.exists()

  if description.ensure == "absent":
    if exists:
      provider.destroy()
    else:
      log.verbose(f"zpool {description.pool}: absent as required")
    return

  if not exists:
    provider.create()
    return

  for fld in CATEGORIES + POOL_PROPERTIES:
    should = getattr(description, fld)
    if should is None:
      continue
    current = provider.get(fld)
    if current == UNAVAILABLE and fld in POOL_PROPERTIES:
      log.verbose(f"zpool {description.pool}: {fld} not available on this platform, ignoring")
      continue
    if is_in_sync(fld, current, should):
      log.trace(f"zpool {description.pool}: {fld} in sync")
      continue
    log.info(f"zpool {description.pool}: {fld} is {current}, should be {should}")
    provider.set(fld, should)


def reconcile_all(root: ZDeclare):
  failed = []
  owners = dict()
  for entity in root.content:
    if not isinstance(entity, ZPool):
      continue
    try:
      reconcile(entity)
    except ZDeclareError as ex:
      log.error(f"zpool {entity.pool}: {ex}")
      failed.append(entity.pool)
    for cmd in commands.commands:
      owners.setdefault(id(cmd), entity.pool)
  for cmd in commands.execute_commands():
    pool = owners.get(id(cmd))
    if pool is not None and pool not in failed:
      failed.append(pool)
  return failed



def handle_apply(args):
  root = init_config(args.config_path)
  if args.dry_run:
    config.commands_enabled = False
  failed = reconcile_all(root)
  if failed:
    log.error(f"could not apply configuration for: {', '.join(failed)}")
    return 1
  return 0


def topology_rows(topology):
  rows = []
  for category in CATEGORIES:
    for i, group in enumerate(topology.get(category) or []):
      prefix = (topology.raid_parity or DEFAULT_RAID_PARITY) if category == "raidz" else category
      rows.append([category, f"{prefix}-{i}" if category in ("mirror", "raidz") else "", group])
  return rows


def handle_status(args):
  topology = ZPoolProvider(ZPool(name=args.pool)).current_pool()
  if not topology.exists():
    log.error(f"zpool {args.pool} does not exist")
    return 1
  if args.format == "ki":
    KdStream(sys.stdout).print_obj(topology)
    sys.stdout.write("\n")
  else:
    sys.stdout.write(tabulate(topology_rows(topology), headers=["category", "vdev", "devices"], tablefmt=args.format))
    sys.stdout.write("\n")
  sys.stdout.flush()
  return 0


def handle_list(_args):
  for name in parse_pool_list(config.list_zpools()):
    sys.stdout.write(f"{name}\n")
  return 0


def handle_plan(args):
  init_config(args.config_path)
  description = find_configured_pool(args.pool)
  sys.stdout.write(shlex.join(zpool(build_create_args(description))) + "\n")
  return 0


def handle_destroy(args):
  provider = ZPoolProvider(ZPool(name=args.pool))
  if not provider.exists():
    log.info(f"zpool {args.pool} does not exist, nothing to destroy")
    return 0
  if not confirm(f"destroy zpool {args.pool} and all data on it?", assume_yes=args.yes):
    log.info("aborted")
    return 1
  provider.destroy()
  return 1 if commands.execute_commands() else 0


def handle_get(args):
  value = ZPoolProvider(ZPool(name=args.pool)).get(args.field)
  if isinstance(value, list):
    for group in value:
      sys.stdout.write(f"{group}\n")
  elif value is not None:
    sys.stdout.write(f"{value}\n")
  return 0


def handle_set(args):
  ZPoolProvider(ZPool(name=args.pool)).set(args.field, args.value)
  return 1 if commands.execute_commands() else 0
