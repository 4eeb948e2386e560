"""
resource_orchestrator.templates

Template package.

Responsibilities:
- Load raw manifest/welcome templates for a named resource.
- Render templates against request settings.
"""

# Package marker.
