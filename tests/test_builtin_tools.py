"""Tests for the built-in ARC tool catalog, executed through a real DispatchCore."""

from __future__ import annotations

import pytest

from src.config.settings import Settings
from src.gateway.dispatch import DispatchCore, build_dispatch_core
from src.infra.errors import ToolExecutionError, ToolValidationError


@pytest.fixture()
def arc_core() -> DispatchCore:
    return build_dispatch_core(Settings())


class TestCatalogSchemas:
    def test_every_tool_has_object_schema(self, arc_core: DispatchCore) -> None:
        for tool in arc_core.list_tools():
            assert tool.parameters["type"] == "object"
            assert tool.id.startswith("arc.")
            assert tool.version == "1.0.0"

    def test_required_fields(self, arc_core: DispatchCore) -> None:
        schema = arc_core.registry.get("arc.deployment.deploy").parameters
        assert schema["required"] == ["projectPath", "environment", "options"]


class TestAuthenticationTool:
    @pytest.mark.asyncio
    async def test_login(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.api.authentication",
            {"action": "login", "credentials": {"username": "alice", "password": "pw"}},
        )
        assert result["success"] is True
        assert result["user"]["username"] == "alice"
        assert result["token"].startswith("tok-")
        assert result["expiresIn"] == 3600

    @pytest.mark.asyncio
    async def test_login_without_username(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.api.authentication", {"action": "login", "credentials": {}}
        )
        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_verify_token(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.api.authentication", {"action": "verifyToken", "token": "abc"}
        )
        assert result["valid"] is True

    @pytest.mark.asyncio
    async def test_unknown_action_rejected_by_schema(self, arc_core: DispatchCore) -> None:
        with pytest.raises(ToolValidationError):
            await arc_core.execute_tool("arc.api.authentication", {"action": "dance"})

    @pytest.mark.asyncio
    async def test_unknown_action_without_validation(self) -> None:
        settings = Settings()
        settings.dispatch.validate_input = False
        core = build_dispatch_core(settings)

        with pytest.raises(ToolExecutionError, match="Unknown action: dance"):
            await core.execute_tool("arc.api.authentication", {"action": "dance"})


class TestNotificationTool:
    @pytest.mark.asyncio
    async def test_send(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.api.notification",
            {"channel": "email", "recipient": "bob@example.com", "subject": "hi"},
        )
        assert result["success"] is True
        assert result["channel"] == "email"
        assert result["messageId"].startswith("msg-")

    @pytest.mark.asyncio
    async def test_missing_recipient(self, arc_core: DispatchCore) -> None:
        with pytest.raises(ToolValidationError, match="recipient"):
            await arc_core.execute_tool("arc.api.notification", {"channel": "sms"})


class TestGeneratorTools:
    @pytest.mark.asyncio
    async def test_microservice_files(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.generator.microservice",
            {
                "name": "orders",
                "features": ["authentication", "database"],
                "models": [{"name": "Order"}],
            },
        )
        files = result["files"]
        assert result["outputDir"] == "./generated"
        assert "./generated/orders/package.json" in files
        assert "./generated/orders/src/controllers/auth.controller.ts" in files
        assert "./generated/orders/src/models/order.model.ts" in files
        assert "2 features and 1 models" in result["message"]

    @pytest.mark.asyncio
    async def test_model(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.generator.model",
            {"projectPath": "/app", "name": "Invoice", "properties": {"total": "number"}},
        )
        assert result["files"][0] == "/app/src/models/invoice.model.ts"

    @pytest.mark.asyncio
    async def test_controller_default_operations(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.generator.controller",
            {"projectPath": "/app", "name": "Invoice", "modelName": "Invoice"},
        )
        assert result["files"] == ["/app/src/controllers/invoice.controller.ts"]
        assert "with 4 operations" in result["message"]


class TestDeploymentTools:
    @pytest.mark.asyncio
    async def test_kubernetes_infrastructure(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.deployment.infrastructure", {"projectPath": "/app", "platform": "kubernetes"}
        )
        assert len(result["files"]) == 5
        assert result["files"][0] == "/app/infrastructure/k8s/deployment.yaml"

    @pytest.mark.asyncio
    async def test_docker_falls_back_to_compose(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.deployment.infrastructure", {"projectPath": "/app", "platform": "docker"}
        )
        assert result["files"] == ["/app/infrastructure/docker-compose.yaml"]

    @pytest.mark.asyncio
    async def test_deploy_url(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.deployment.deploy",
            {
                "projectPath": "/app",
                "environment": "staging",
                "options": {"platform": "azure", "appName": "shop"},
            },
        )
        assert result["deploymentUrl"] == "https://shop-staging.azurewebsites.net"

    @pytest.mark.asyncio
    async def test_deploy_requires_platform(self, arc_core: DispatchCore) -> None:
        with pytest.raises(ToolValidationError, match="platform"):
            await arc_core.execute_tool(
                "arc.deployment.deploy",
                {"projectPath": "/app", "environment": "staging", "options": {}},
            )

    @pytest.mark.asyncio
    async def test_cicd_github(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool(
            "arc.deployment.cicd",
            {"projectPath": "/app", "platform": "github", "options": {"environments": ["dev"]}},
        )
        assert result["files"] == [
            "/app/.github/workflows/ci.yaml",
            "/app/.github/workflows/cd.yaml",
        ]


class TestDocumentationTool:
    @pytest.mark.asyncio
    async def test_search_shape(self, arc_core: DispatchCore) -> None:
        result = await arc_core.execute_tool("arc.docs.search", {"query": "authentication"})
        assert result["query"] == "authentication"
        assert result["totalCount"] == len(result["results"])
        assert result["results"][0]["title"] == "Authentication Service"
