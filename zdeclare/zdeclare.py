import traceback
import argparse

from .logging import log
from .util import env_var_or, get_version
from .user_commands import handle_apply, handle_status, handle_list, handle_plan, handle_destroy, handle_get, handle_set
from .provider import FIELD_ACCESSORS
from .defaults import ZDECLARE_CONFIG_PATH_DEFAULT
from . import config as config



def main(args=None):

  parser = argparse.ArgumentParser(prog="zdeclare", description="declarative management of zfs pools")
  parser.add_argument('--version', action='version', version=f'zdeclare {get_version()}')
  parser.add_argument("--log-level", type=str, default=None, choices=list(config.log_level_for_name), help="overrides the log level (and the one from the config file)")
  subs = parser.add_subparsers(required=True)


  config_parser = argparse.ArgumentParser(add_help=False)
  config_parser.add_argument("--config-path", type=str, help=f"the path to the config file. May be set via the environment variable `ZDECLARE_CONFIG_PATH`. Defaults to `{ZDECLARE_CONFIG_PATH_DEFAULT}`", default=env_var_or("ZDECLARE_CONFIG_PATH", ZDECLARE_CONFIG_PATH_DEFAULT))

  pool_parser = argparse.ArgumentParser(add_help=False)
  pool_parser.add_argument("pool", type=str, help="the name of the zpool")


  apply_parser = subs.add_parser("apply", parents=[config_parser], help="creates, destroys and updates the zpools in the config file so they match their description. Changes to the vdev layout of an existing pool are reported as errors, they are never applied.")
  apply_parser.add_argument("--dry-run", action="store_true", help="log the commands that would run instead of running them")
  apply_parser.set_defaults(func=handle_apply)

  plan_parser = subs.add_parser("plan", parents=[config_parser, pool_parser], help="prints the `zpool create` command for a configured zpool")
  plan_parser.set_defaults(func=handle_plan)

  status_parser = subs.add_parser("status", parents=[pool_parser], help="shows the vdev layout of a zpool as zdeclare sees it")
  status_parser.add_argument("--format", type=str, default="simple", help="`ki` or any table format supported by tabulate (simple, plain, github, ...)")
  status_parser.set_defaults(func=handle_status)

  list_parser = subs.add_parser("list", help="lists the names of all imported zpools")
  list_parser.set_defaults(func=handle_list)

  destroy_parser = subs.add_parser("destroy", parents=[pool_parser], help="destroys a zpool")
  destroy_parser.add_argument("--yes", action="store_true", help="do not ask for confirmation")
  destroy_parser.set_defaults(func=handle_destroy)

  get_parser = subs.add_parser("get", parents=[pool_parser], help="shows a field of a zpool")
  get_parser.add_argument("field", type=str, choices=list(FIELD_ACCESSORS))
  get_parser.set_defaults(func=handle_get)

  set_parser = subs.add_parser("set", parents=[pool_parser], help="sets a property of a zpool (ashift, autoexpand, failmode)")
  set_parser.add_argument("field", type=str, choices=list(FIELD_ACCESSORS))
  set_parser.add_argument("value", type=str)
  set_parser.set_defaults(func=handle_set)


  args = parser.parse_args(args=args)

  if args.log_level is not None:
    config.set_log_level(args.log_level)
    config.log_level_from_cli = True

  try:
    return args.func(args)
  except Exception as exception:
    log.error(str(exception))
    traceback.print_exc()
    return 1



if __name__ == "__main__":
  raise SystemExit(main())
