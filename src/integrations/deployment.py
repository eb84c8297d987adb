"""Simulated deployment assistance: infrastructure-as-code, deploys, CI/CD.

Nothing is written to disk or sent to a cloud provider; results list the
files and URLs a real run would produce.
"""

from __future__ import annotations

from typing import Any

import structlog

logger = structlog.get_logger()

_INFRASTRUCTURE_FILES: dict[str, tuple[str, ...]] = {
    "aws": (
        "infrastructure/aws/cloudformation.yaml",
        "infrastructure/aws/s3.tf",
        "infrastructure/aws/ec2.tf",
        "infrastructure/aws/rds.tf",
    ),
    "azure": (
        "infrastructure/azure/arm-template.json",
        "infrastructure/azure/app-service.tf",
        "infrastructure/azure/sql.tf",
    ),
    "gcp": (
        "infrastructure/gcp/deployment-manager.yaml",
        "infrastructure/gcp/app-engine.yaml",
        "infrastructure/gcp/cloud-sql.tf",
    ),
    "kubernetes": (
        "infrastructure/k8s/deployment.yaml",
        "infrastructure/k8s/service.yaml",
        "infrastructure/k8s/ingress.yaml",
        "infrastructure/k8s/configmap.yaml",
        "infrastructure/k8s/secret.yaml",
    ),
}
_DEFAULT_INFRASTRUCTURE_FILES = ("infrastructure/docker-compose.yaml",)

_CICD_FILES: dict[str, tuple[str, ...]] = {
    "github": (".github/workflows/ci.yaml", ".github/workflows/cd.yaml"),
    "gitlab": (".gitlab-ci.yml",),
    "azure-devops": ("azure-pipelines.yml",),
    "jenkins": ("Jenkinsfile",),
}
_DEFAULT_CICD_FILES = ("ci-cd-config.yaml",)

_DEPLOYMENT_DOMAINS: dict[str, str] = {
    "aws": "amazonaws.com",
    "azure": "azurewebsites.net",
    "gcp": "appspot.com",
}
_DEFAULT_DEPLOYMENT_DOMAIN = "example.com"


def _under(project_path: str, files: tuple[str, ...]) -> list[str]:
    root = project_path.rstrip("/")
    return [f"{root}/{f}" for f in files]


class DeploymentService:
    async def generate_infrastructure(
        self, project_path: str, platform: str, options: dict[str, Any]
    ) -> dict[str, Any]:
        logger.info("infrastructure_generated", project_path=project_path, platform=platform)
        files = _INFRASTRUCTURE_FILES.get(platform.lower(), _DEFAULT_INFRASTRUCTURE_FILES)
        return {
            "success": True,
            "platform": platform,
            "files": _under(project_path, files),
            "message": f"Successfully generated infrastructure code for {platform}",
        }

    async def deploy_application(
        self, project_path: str, environment: str, options: dict[str, Any]
    ) -> dict[str, Any]:
        platform = options.get("platform")
        if not platform:
            raise ValueError("options.platform is required for deployment")
        app_name = options.get("appName") or "arc-app"
        domain = _DEPLOYMENT_DOMAINS.get(platform.lower(), _DEFAULT_DEPLOYMENT_DOMAIN)
        logger.info(
            "application_deployed",
            project_path=project_path,
            environment=environment,
            platform=platform,
        )
        return {
            "success": True,
            "platform": platform,
            "environment": environment,
            "deploymentUrl": f"https://{app_name}-{environment}.{domain}",
            "message": f"Successfully deployed to {environment}",
        }

    async def configure_cicd(
        self, project_path: str, platform: str, options: dict[str, Any]
    ) -> dict[str, Any]:
        logger.info("cicd_configured", project_path=project_path, platform=platform)
        files = _CICD_FILES.get(platform.lower(), _DEFAULT_CICD_FILES)
        return {
            "success": True,
            "platform": platform,
            "files": _under(project_path, files),
            "message": f"Successfully configured CI/CD pipeline for {platform}",
        }
