"""
resource_orchestrator.api

API package for the Resource Orchestrator service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and HTTP error translation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
