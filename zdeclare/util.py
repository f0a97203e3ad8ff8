import os
import shlex
import subprocess
from importlib import metadata
import yaml

from .logging import log



def myexec(command):
  if isinstance(command, str):
    command = shlex.split(command)
  cmd_str = shlex.join(command)
  log.debug(f"Executing command: `{cmd_str}`")
  try:
    process = subprocess.run(command,
                 stdout=subprocess.PIPE,
                 stderr=subprocess.PIPE,
                 check=False)
  except FileNotFoundError as exception:
    log.debug(f"Command `{cmd_str}` could not be started: {exception}")
    return 127, [str(exception)], [], [str(exception)]

  formatted_output = []
  formatted_response = []
  formatted_error = []
  for line in process.stdout.decode("utf-8").splitlines():
    if line != "":
      log.trace(f"stdout: {line}")
      formatted_response.append(line)
      formatted_output.append(line)
  for line in process.stderr.decode("utf-8").splitlines():
    if line != "":
      log.debug(f"stderr: {line}")
      formatted_error.append(line)
      formatted_output.append(line)
  if process.returncode != 0:
    log.debug(f"Command `{cmd_str}` failed with return code {process.returncode}.")
  return process.returncode, formatted_output, formatted_response, formatted_error



def load_yaml_config(config_file_path):
  with open(config_file_path, encoding="utf-8") as config_file:
    return yaml.full_load(config_file)


def require_path(path, msg):
  if path is None or not os.path.exists(path):
    raise ValueError(f"{msg}: {path}")


def env_var_or(v, d):
  r = os.getenv(v)
  if r is None:
    return d
  else:
    return r


def get_version():
  try:
    return metadata.version("zdeclare")
  except metadata.PackageNotFoundError:
    return "unknown"
