"""
resource_orchestrator.resources

Resource domain package.

Responsibilities:
- Domain objects (Resource, Setting, RenderedResource) and request mapping.
- Collaborator contracts consumed by the orchestrator.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here performs I/O; concrete collaborators live in `templates`, `cluster` and `auth`.
