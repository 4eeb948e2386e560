"""
resource_orchestrator.db

Persistence package (SQLAlchemy async) for the team registry.

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.
