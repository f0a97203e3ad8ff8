
# returned for properties the platform does not know (ashift is linux only)
UNAVAILABLE = "-"


def parse_property(output, name):
  """
  Picks the value out of `zpool get <property> <pool>` output, whose lines
  read `NAME PROPERTY VALUE SOURCE`. If several lines are about `name`, the
  last one counts. Returns None if there is none.
  """
  if output is None:
    return None
  for line in reversed(output.splitlines()):
    fields = line.split()
    if len(fields) >= 3 and fields[0] == name:
      return fields[2]
  return None


def parse_pool_list(output):
  """Pool names from `zpool list -H` (NAME SIZE ALLOC FREE ... separated by tabs)."""
  if output is None:
    return []
  return [line.split()[0] for line in output.splitlines() if line.strip() != ""]
