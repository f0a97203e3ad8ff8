import shlex
from dataclasses import field, dataclass

from .util import myexec
from .logging import log
from . import config as config

@dataclass
class Command:
  args: list

  on_execute: list = field(default_factory=list)

  @property
  def command(self):
    return shlex.join(self.args)

  def execute(self):
    log.info(f"executing command: {self.command}")
    returncode, _, results, errors = myexec(self.args)
    for h in self.on_execute:
      h(self, returncode, results, errors)
    return returncode

  def skip(self):
    log.warning(f"skipping command: {self.command}")
    for h in self.on_execute:
      h(self, 0, [], [])
    return 0




commands = []

def add_command(args, handler=None, unless_redundant=False):
  if unless_redundant:
    for cmd in commands:
      if cmd.args == args:
        if handler is not None:
          cmd.on_execute.append(handler)
        return cmd
  cmd = Command(list(args))
  if handler is not None:
    cmd.on_execute.append(handler)
  commands.append(cmd)
  return cmd



def execute_commands():
  global commands

  if not config.commands_enabled and len(commands) > 0:
    log.warning("command execution currently disabled.")
  # handlers may queue follow-up commands, those run in the next call
  pending = commands
  commands = []
  failed = []
  for cmd in pending:
    if config.commands_enabled:
      returncode = cmd.execute()
    else:
      returncode = cmd.skip()
    if returncode != 0:
      failed.append(cmd)
  return failed
