import logging
import os
from pathlib import Path

DEFAULT_BINARY_NAME = "yblp"
MISSING_ARTIFACT_STATUS = 127

logger = logging.getLogger(__name__)


class LauncherError(RuntimeError):
  exit_status = 1


class PathResolutionError(LauncherError):
  pass


class MissingArtifactError(LauncherError):
  exit_status = MISSING_ARTIFACT_STATUS

  def __init__(self, path):
    super().__init__(
      f"artifact {path} is missing or not executable after a successful build"
    )
    self.path = path


def install_dir():
  # <root>/python/src/yblp_launcher/resolver.py -> <root>/python
  try:
    here = Path(__file__).resolve(strict=True)
  except (OSError, RuntimeError) as exc:
    raise PathResolutionError(f"cannot resolve launcher location: {exc}") from exc
  return here.parents[2]


def project_root():
  override = os.environ.get("YBLP_PROJECT_ROOT")
  if override:
    try:
      root = Path(override).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
      raise PathResolutionError(
        f"YBLP_PROJECT_ROOT cannot be resolved: {override}"
      ) from exc
    if not root.is_dir():
      raise PathResolutionError(f"YBLP_PROJECT_ROOT is not a directory: {root}")
    logger.debug("project root from YBLP_PROJECT_ROOT: %s", root)
    return root

  root = install_dir().parent
  logger.debug("project root: %s", root)
  return root


def binary_name():
  name = os.environ.get("YBLP_BINARY_NAME") or DEFAULT_BINARY_NAME
  if os.name == "nt" and not name.lower().endswith(".exe"):
    name += ".exe"
  return name


def artifact_path(root):
  return Path(root) / "target" / "release" / binary_name()


def is_executable(file_path):
  try:
    path = Path(file_path)
    if not path.is_file():
      return False
    if os.name == "nt":
      return True
    return os.access(file_path, os.X_OK)
  except OSError:
    return False


def resolve_artifact(root):
  """Return the built artifact under ``root`` or raise MissingArtifactError."""
  candidate = artifact_path(root)
  if not is_executable(candidate):
    raise MissingArtifactError(candidate)
  return str(candidate)
