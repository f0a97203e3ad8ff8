import platform
import logging
from . import logging as zdeclare_logging


cache_dict: dict = None
config_root = None
config_path = None
commands_enabled = True
zpool_command = "zpool"
log_level = logging.INFO
log_level_from_cli = False

# decides whether zpool status is asked for full paths (-P) and whether
# partition paths get resolved to their parent device
kernel = platform.system()


def is_linux():
  return kernel == "Linux"


def set_log_level(level):
  global log_level
  if not level in log_level_for_name:
    raise ValueError(f"unknown loglevel: {level}")
  log_level = log_level_for_name[level]
  logging.getLogger().setLevel(log_level)


# the following are replaced by zdeclare.provider on import, and by stubs in the tests

def get_zpool_status(pool):
  raise NotImplementedError()

def get_zpool_property(pool, prop):
  raise NotImplementedError()

def list_zpools():
  raise NotImplementedError()

def lookup_parent_device(dev_path):
  raise NotImplementedError()


log_level_for_name = {
  "trace": zdeclare_logging.TRACE,
  "debug": logging.DEBUG,
  "verbose": zdeclare_logging.VERBOSE,
  "info": logging.INFO,
  "warning": logging.WARNING,
  "error": logging.ERROR,
  "critical": logging.CRITICAL,
}
