"""
resource_orchestrator.services

Service-layer package.

Responsibilities:
- Orchestrate calls across the template source, renderer, cluster gateway and
  authorization gate.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are pure Python and tested with fake collaborators (see tests/fakes.py).
