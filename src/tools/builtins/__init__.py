from __future__ import annotations

from typing import TYPE_CHECKING

from src.integrations.authentication import AuthenticationService
from src.integrations.deployment import DeploymentService
from src.integrations.documentation import DocumentationService
from src.integrations.notification import NotificationService
from src.integrations.project_generator import ProjectGeneratorService
from src.tools.builtins.api_tools import create_api_tools
from src.tools.builtins.deployment_tools import create_deployment_tools
from src.tools.builtins.documentation_tools import create_documentation_tools
from src.tools.builtins.generator_tools import create_generator_tools
from src.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from src.config.settings import Settings


def register_builtins(registry: ToolRegistry, settings: Settings) -> None:
    """Register the built-in ARC tool catalog with the registry.

    Order is fixed: API, generator, deployment, documentation. A later group
    that reuses an id replaces the earlier descriptor (registry last-write-wins).
    """
    docs_cache_ttl_s = settings.docs.cache_expiration_s if settings.docs.cache_enabled else 0.0
    catalog = [
        *create_api_tools(
            AuthenticationService(
                settings.services.auth_service_url,
                token_ttl_s=settings.security.token_expiration_s,
            ),
            NotificationService(settings.services.notification_service_url),
        ),
        *create_generator_tools(ProjectGeneratorService()),
        *create_deployment_tools(DeploymentService()),
        *create_documentation_tools(
            DocumentationService(settings.docs.base_url, cache_ttl_s=docs_cache_ttl_s)
        ),
    ]
    for descriptor in catalog:
        registry.register(descriptor)
