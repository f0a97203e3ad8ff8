import re

from .logging import log
from . import config as config


# first partition of a plain disk (/dev/sda1), of an nvme namespace
# (/dev/nvme0n1p1) or of a by-id link (/dev/disk/by-id/ata-...-part1)
PARTITION_REGEX = re.compile(r'/dev/(?:[a-z]+(?:[0-9]+n[0-9]+p)?1|disk/by-id/.+-part1)$')


def is_partition_path(dev_path):
  return PARTITION_REGEX.search(dev_path) is not None


def normalize_device(dev_path, linux):
  """
  Returns the whole-disk device for a partition path reported by
  `zpool status -P` on linux, so that it compares equal to the disk the pool
  was created with. Anything else is returned unchanged.

  Raises DeviceLookupError (from `config.lookup_parent_device`) if the parent
  device cannot be determined.
  """
  if not linux or not is_partition_path(dev_path):
    return dev_path
  parent = config.lookup_parent_device(dev_path)
  log.trace(f"{dev_path} is a partition of {parent}")
  return parent
