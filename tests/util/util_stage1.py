
import inspect
import os

from zdeclare.dataclasses import CommandFailed, DeviceLookupError


def get_frame_data(levels=0):
  frame = inspect.currentframe()
  frame = frame.f_back
  for _ in range(levels):
    frame = frame.f_back
  file = inspect.getfile(frame)
  return (os.path.dirname(file), file, frame.f_code.co_name)


def open_local(file, mode, levels=0):
  package_path, _, _ = get_frame_data(levels + 1)
  filepath = os.path.join(package_path, file)
  return open(filepath, mode, encoding="utf8")


def get_caller_name_from_module(module_path):
  for frame_info in inspect.stack():
    frame = frame_info.frame
    if module_path in inspect.getfile(frame):
      return frame.f_code.co_name
  return None


def string_or_none_from_file(path):
  with open(path, "r", encoding="utf8") as f:
    r = f.read()
    if r == "":
      return None
    return r


def first_existing(paths):
  for path in paths:
    if os.path.isfile(path):
      return path
  return None



# all the stubs look up fixture files in the `res` directory next to the test
# module that installed them, preferring files named after the running test.


# res/[<test_name>.][<pool>.]zpool-status.txt, an empty file means the pool does not exist
def insert_zpool_status_stub():

  package_path, module_path, _ = get_frame_data(1)

  def get_zpool_status_stub(zpool):
    fn_name = get_caller_name_from_module(module_path)
    if fn_name is None:
      raise ValueError(f"this get_zpool_status_stub is only usable from within {module_path}")

    path = first_existing([
      f"{package_path}/res/{fn_name}.zpool-status.txt",
      f"{package_path}/res/{fn_name}.{zpool}.zpool-status.txt",
      f"{package_path}/res/{zpool}.zpool-status.txt",
    ])
    if path is None:
      raise ValueError(f"found no zpool-status.txt candidate for {fn_name} and {zpool}")
    return string_or_none_from_file(path)

  import zdeclare.config as config #pylint: disable=import-outside-toplevel
  config.get_zpool_status = get_zpool_status_stub



# res/[<test_name>.]<pool>.<property>.zpool-get.txt, a missing file behaves like
# a property the platform does not know
def insert_zpool_property_stub():

  package_path, module_path, _ = get_frame_data(1)

  def get_zpool_property_stub(zpool, prop):
    fn_name = get_caller_name_from_module(module_path)
    if fn_name is None:
      raise ValueError(f"this get_zpool_property_stub is only usable from within {module_path}")

    path = first_existing([
      f"{package_path}/res/{fn_name}.{zpool}.{prop}.zpool-get.txt",
      f"{package_path}/res/{zpool}.{prop}.zpool-get.txt",
    ])
    if path is None:
      raise CommandFailed(["zpool", "get", prop, zpool], 2, [f"bad property list: invalid property '{prop}'"])
    return string_or_none_from_file(path)

  import zdeclare.config as config #pylint: disable=import-outside-toplevel
  config.get_zpool_property = get_zpool_property_stub



def insert_lookup_parent_device_stub(parents):

  def lookup_parent_device_stub(dev_path):
    if dev_path not in parents:
      raise DeviceLookupError(f"could not determine the parent device of {dev_path}")
    return parents[dev_path]

  import zdeclare.config as config #pylint: disable=import-outside-toplevel
  config.lookup_parent_device = lookup_parent_device_stub
