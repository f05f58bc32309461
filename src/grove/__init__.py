"""grove: static content site builder with date resolution and folder listings."""

from grove.orchestration.build import run_build

__version__ = "0.1.0"
__all__ = [
    "run_build",
]
