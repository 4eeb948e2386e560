"""
resource_orchestrator.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (Principal + role checks).
- Team-membership authorization gate for resource operations.
"""

# Package marker.
