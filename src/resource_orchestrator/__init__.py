"""
resource_orchestrator

Top-level package for the Resource Lifecycle Orchestrator service.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal; importing the package must not load kube config or open DB pools.
