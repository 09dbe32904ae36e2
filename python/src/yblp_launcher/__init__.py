"""Build-then-run launcher for the yblp log processor."""

__version__ = "0.1.0"

from .launcher import BuildFailure, run
from .resolver import (
  LauncherError,
  MissingArtifactError,
  PathResolutionError,
  project_root,
  resolve_artifact,
)

__all__ = [
  "BuildFailure",
  "LauncherError",
  "MissingArtifactError",
  "PathResolutionError",
  "project_root",
  "resolve_artifact",
  "run",
]
