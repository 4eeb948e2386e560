"""
resource_orchestrator.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for API, registry, templates and cluster layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object injected across layers.
    Every field can be overridden with a `RESOURCE_ORCHESTRATOR_<FIELD>` env var.
    """

    model_config = SettingsConfigDict(env_prefix="RESOURCE_ORCHESTRATOR_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and the dev token route.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "resource-orchestrator"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "resource-orchestrator"
    jwt_audience: str = "resource-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Team registry
    database_url: str = "sqlite+aiosqlite:///./resources.db"

    # Templates: <templates_dir>/<resource name>/<template_filename|welcome_filename>
    templates_dir: Path = Path("./resource-templates")
    template_filename: str = "template.yaml"
    welcome_filename: str = "welcome.txt"

    # Cluster
    kube_in_cluster: bool = False
    kubeconfig: str | None = None
    kube_context: str | None = None
    namespace_label_prefix: str = "resource-orchestrator.io"

    # Orchestrator
    operation_timeout_seconds: float = Field(default=30.0, gt=0)
    rollback_on_failure: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `rollback_on_failure` is off by default: a namespace left behind by a failed render/apply
# is reported as an internal error and cleaned up by the caller with a delete.
