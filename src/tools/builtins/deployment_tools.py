from __future__ import annotations

from src.integrations.deployment import DeploymentService
from src.tools.base import ToolDescriptor, ToolGroup, ToolInput, ToolOutput

DEPLOY_PLATFORMS = ("aws", "azure", "gcp", "kubernetes", "docker")
DEPLOY_ENVIRONMENTS = ("development", "staging", "production", "custom")
CICD_PLATFORMS = ("github", "gitlab", "azure-devops", "jenkins", "other")

_PROJECT_PATH = {"type": "string", "description": "Path to the ARC project"}


def create_deployment_tools(deployment: DeploymentService) -> list[ToolDescriptor]:
    """Infrastructure, deploy and CI/CD configuration tools."""

    async def infrastructure(arguments: ToolInput) -> ToolOutput:
        return await deployment.generate_infrastructure(
            arguments["projectPath"], arguments["platform"], arguments.get("options") or {}
        )

    async def deploy(arguments: ToolInput) -> ToolOutput:
        return await deployment.deploy_application(
            arguments["projectPath"], arguments["environment"], arguments["options"]
        )

    async def cicd(arguments: ToolInput) -> ToolOutput:
        return await deployment.configure_cicd(
            arguments["projectPath"], arguments["platform"], arguments["options"]
        )

    return [
        ToolDescriptor(
            id="arc.deployment.infrastructure",
            name="ARC Infrastructure Generator",
            description=(
                "Generate infrastructure as code for deploying ARC applications "
                "to various cloud platforms"
            ),
            group=ToolGroup.deployment,
            parameters={
                "type": "object",
                "properties": {
                    "projectPath": _PROJECT_PATH,
                    "platform": {
                        "type": "string",
                        "enum": list(DEPLOY_PLATFORMS),
                        "description": "Target deployment platform",
                    },
                    "options": {
                        "type": "object",
                        "properties": {
                            "region": {
                                "type": "string",
                                "description": "Cloud region for deployment",
                            },
                            "resources": {
                                "type": "object",
                                "properties": {
                                    "cpu": {"type": "string"},
                                    "memory": {"type": "string"},
                                    "storage": {"type": "string"},
                                },
                                "description": "Resource requirements",
                            },
                            "database": {
                                "type": "object",
                                "properties": {
                                    "type": {"type": "string"},
                                    "version": {"type": "string"},
                                },
                                "description": "Database configuration",
                            },
                            "scaling": {
                                "type": "object",
                                "properties": {
                                    "minInstances": {"type": "number"},
                                    "maxInstances": {"type": "number"},
                                    "targetCpuUtilization": {"type": "number"},
                                },
                                "description": "Auto-scaling configuration",
                            },
                        },
                        "description": "Additional deployment options",
                    },
                },
                "required": ["projectPath", "platform"],
            },
            handler=infrastructure,
        ),
        ToolDescriptor(
            id="arc.deployment.deploy",
            name="ARC Application Deployer",
            description="Deploy an ARC application to a specified environment",
            group=ToolGroup.deployment,
            parameters={
                "type": "object",
                "properties": {
                    "projectPath": _PROJECT_PATH,
                    "environment": {
                        "type": "string",
                        "enum": list(DEPLOY_ENVIRONMENTS),
                        "description": "Target deployment environment",
                    },
                    "options": {
                        "type": "object",
                        "properties": {
                            "platform": {
                                "type": "string",
                                "enum": list(DEPLOY_PLATFORMS),
                                "description": "Target deployment platform",
                            },
                            "region": {
                                "type": "string",
                                "description": "Cloud region for deployment",
                            },
                            "appName": {
                                "type": "string",
                                "description": "Application name for deployment",
                            },
                        },
                        "required": ["platform"],
                        "description": "Additional deployment options",
                    },
                },
                "required": ["projectPath", "environment", "options"],
            },
            handler=deploy,
        ),
        ToolDescriptor(
            id="arc.deployment.cicd",
            name="ARC CI/CD Configurator",
            description="Configure CI/CD pipelines for ARC applications",
            group=ToolGroup.deployment,
            parameters={
                "type": "object",
                "properties": {
                    "projectPath": _PROJECT_PATH,
                    "platform": {
                        "type": "string",
                        "enum": list(CICD_PLATFORMS),
                        "description": "CI/CD platform",
                    },
                    "options": {
                        "type": "object",
                        "properties": {
                            "environments": {
                                "type": "array",
                                "items": {"type": "string"},
                                "description": "Deployment environments (e.g., dev, staging, prod)",
                            },
                            "testStages": {
                                "type": "array",
                                "items": {"type": "string"},
                                "description": "Test stages to include (e.g., unit, integration, e2e)",
                            },
                            "deployOnMerge": {
                                "type": "boolean",
                                "description": "Whether to deploy automatically on merge to main branch",
                            },
                            "autoRollback": {
                                "type": "boolean",
                                "description": "Whether to roll back automatically on deployment failure",
                            },
                            "notifications": {
                                "type": "object",
                                "properties": {
                                    "email": {"type": "array", "items": {"type": "string"}},
                                    "slack": {"type": "string"},
                                },
                                "description": "Notification settings",
                            },
                        },
                        "required": ["environments"],
                        "description": "CI/CD configuration options",
                    },
                },
                "required": ["projectPath", "platform", "options"],
            },
            handler=cicd,
        ),
    ]
