import logging
import os
import shlex
import subprocess
import sys
import tempfile

from .resolver import (
  LauncherError,
  MissingArtifactError,
  project_root,
  resolve_artifact,
)

BUILD_TOOL_MISSING_STATUS = 127

logger = logging.getLogger(__name__)


class BuildFailure(LauncherError):
  def __init__(self, status, diagnostics=b""):
    super().__init__(f"build failed with exit status {status}")
    self.status = status
    self.exit_status = status
    self.diagnostics = diagnostics


def build_command():
  cargo = os.environ.get("CARGO") or "cargo"
  extra = shlex.split(os.environ.get("YBLP_BUILD_ARGS", ""))
  return [cargo, "build", "--release", *extra]


def exit_status(returncode):
  """Map a subprocess return code onto a process exit status."""
  if returncode < 0:
    return 128 - returncode
  return returncode


def wait(process):
  """Wait for ``process`` to exit, riding out Ctrl-C in the launcher."""
  while True:
    try:
      return process.wait()
    except KeyboardInterrupt:
      # The child shares our process group and receives the signal itself.
      continue


def build(root, command=None):
  """Run the release build in ``root`` with stderr captured to a scratch file.

  Returns ``(status, scratch)``. The scratch file is positioned at the start
  and the caller owns closing it.
  """
  command = command or build_command()
  scratch = tempfile.TemporaryFile()
  logger.debug("building in %s: %s", root, " ".join(command))
  try:
    process = subprocess.Popen(command, cwd=root, stderr=scratch)
  except OSError as exc:
    scratch.write(f"failed to run {command[0]}: {exc}\n".encode("utf-8"))
    scratch.seek(0)
    return BUILD_TOOL_MISSING_STATUS, scratch
  with process:
    returncode = wait(process)
  scratch.seek(0)
  return exit_status(returncode), scratch


def replay_diagnostics(diagnostics, stream=None):
  if stream is None:
    sys.stderr.flush()
    stream = sys.stderr.buffer
  stream.write(diagnostics)
  stream.flush()


def check_build(status, scratch):
  if status == 0:
    return
  diagnostics = scratch.read()
  raise BuildFailure(status, diagnostics)


def execute(path, args):
  """Run the artifact with inherited streams and return its exit status."""
  command = [str(path), *args]
  logger.debug("executing %s", command)
  try:
    process = subprocess.Popen(command)
  except OSError as exc:
    raise MissingArtifactError(path) from exc
  with process:
    returncode = wait(process)
  return exit_status(returncode)


def run(args, root=None, command=None, stream=None):
  """Build the project, then run its artifact with ``args``.

  Ends in SystemExit carrying the build status on failure or the artifact
  status on success. PathResolutionError and MissingArtifactError propagate.
  """
  args = list(args)
  if root is None:
    root = project_root()

  status, scratch = build(root, command)
  with scratch:
    try:
      check_build(status, scratch)
    except BuildFailure as failure:
      logger.debug("build exited with status %d", failure.status)
      replay_diagnostics(failure.diagnostics, stream)
      raise SystemExit(failure.exit_status) from failure

  artifact = resolve_artifact(root)
  raise SystemExit(execute(artifact, args))
