"""Order manifest builder: consolidate e-commerce order exports into a shipping manifest."""

from .services.orchestrator import build_manifest, run_manifest

__version__ = "0.1.0"

__all__ = [
    "build_manifest",
    "run_manifest",
]
