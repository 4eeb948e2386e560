"""
resource_orchestrator.cluster

Cluster gateway package.

Responsibilities:
- Provide the Kubernetes gateway used to create/delete namespaces and apply manifests.
- Provide transport-independent error classification.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on the `ClusterGateway` protocol, never on this package directly.
