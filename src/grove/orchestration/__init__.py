"""Build orchestration."""

from grove.orchestration.build import BuildResult, run_build, run_build_async

__all__ = ["BuildResult", "run_build", "run_build_async"]
