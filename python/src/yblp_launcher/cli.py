import logging
import os
import sys

from .launcher import run
from .resolver import LauncherError


def configure_logging():
  name = os.environ.get("YBLP_LAUNCHER_LOG_LEVEL", "")
  level = getattr(logging, name.upper(), None)
  if not name or not isinstance(level, int):
    return
  logging.basicConfig(
    level=level,
    stream=sys.stderr,
    format="yblp-launcher %(levelname)s %(name)s: %(message)s",
  )


def main():
  configure_logging()
  try:
    run(sys.argv[1:])
  except LauncherError as exc:
    print(f"yblp: {exc}", file=sys.stderr)
    raise SystemExit(exc.exit_status) from exc
