import logging
from logging import addLevelName
import sys

# Check if systemd is available
try:
  from systemd.journal import JournalHandler
  USE_JOURNAL = True
except ImportError:
  USE_JOURNAL = False


VERBOSE = 15
TRACE = 5


def __init__():

  # Configure the root logger
  logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)7s: %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
  )

  logger = logging.getLogger("zdeclare")
  logger = logging.LoggerAdapter(logger, {'SYSLOG_IDENTIFIER': "zdeclare"})

  def addHandler(handler):
    return logger.logger.addHandler(handler)
  def removeHandler(handler):
    return logger.logger.removeHandler(handler)
  logger.addHandler = addHandler
  logger.removeHandler = removeHandler


  # Add systemd journal handler if available
  if USE_JOURNAL:
    journal_handler = JournalHandler()
    formatter = logging.Formatter('%(levelname)7s: %(message)s')
    journal_handler.setFormatter(formatter)
    logging.getLogger().addHandler(journal_handler)


  def verbose(msg, *args, **kwargs):
    """
    Log between DEBUG and INFO, for what zdeclare decided and why.
    """
    logger.log(VERBOSE, msg, *args, **kwargs)
  logger.verbose = verbose

  def trace(msg, *args, **kwargs):
    """
    Log below DEBUG, for parser internals.
    """
    logger.log(TRACE, msg, *args, **kwargs)
  logger.trace = trace

  return logger


addLevelName(VERBOSE, "VERBOSE")
addLevelName(TRACE, "TRACE")

log = __init__()