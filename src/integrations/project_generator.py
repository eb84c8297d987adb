"""Simulated ARC project scaffolding (microservices, models, controllers)."""

from __future__ import annotations

from typing import Any

import structlog

logger = structlog.get_logger()

DEFAULT_OUTPUT_DIR = "./generated"
DEFAULT_CONTROLLER_OPERATIONS = ("create", "read", "update", "delete")

_BASE_FILES = (
    "package.json",
    "tsconfig.json",
    "README.md",
    "src/index.ts",
    "src/application.ts",
    "src/datasources/db.datasource.ts",
    "src/controllers/ping.controller.ts",
)

_FEATURE_FILES: dict[str, tuple[str, ...]] = {
    "authentication": (
        "src/authentication-strategies/jwt.strategy.ts",
        "src/controllers/auth.controller.ts",
        "src/models/user.model.ts",
        "src/repositories/user.repository.ts",
    ),
    "notification": (
        "src/services/notification.service.ts",
        "src/controllers/notification.controller.ts",
    ),
}


def _model_files(root: str, model_name: str) -> list[str]:
    slug = model_name.lower()
    return [
        f"{root}/src/models/{slug}.model.ts",
        f"{root}/src/repositories/{slug}.repository.ts",
        f"{root}/src/controllers/{slug}.controller.ts",
    ]


class ProjectGeneratorService:
    async def generate_microservice(
        self,
        name: str,
        description: str,
        features: list[str],
        models: list[dict[str, Any]] | None = None,
        output_dir: str = DEFAULT_OUTPUT_DIR,
    ) -> dict[str, Any]:
        models = models or []
        root = f"{output_dir.rstrip('/')}/{name}"
        files = [f"{root}/{f}" for f in _BASE_FILES]
        for feature in features:
            files.extend(f"{root}/{f}" for f in _FEATURE_FILES.get(feature, ()))
        for model in models:
            files.extend(_model_files(root, model["name"]))

        logger.info(
            "microservice_generated",
            name=name,
            features=features,
            models=len(models),
            output_dir=output_dir,
        )
        return {
            "success": True,
            "name": name,
            "description": description,
            "outputDir": output_dir,
            "files": files,
            "message": (
                f"Successfully generated microservice '{name}' with "
                f"{len(features)} features and {len(models)} models"
            ),
        }

    async def generate_model(
        self,
        project_path: str,
        name: str,
        properties: dict[str, Any],
        relations: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        relations = relations or []
        logger.info("model_generated", project_path=project_path, name=name)
        return {
            "success": True,
            "name": name,
            "outputDir": project_path,
            "files": _model_files(project_path.rstrip("/"), name),
            "message": (
                f"Successfully generated model '{name}' with {len(properties)} "
                f"properties and {len(relations)} relations"
            ),
        }

    async def generate_controller(
        self,
        project_path: str,
        name: str,
        model_name: str,
        operations: list[str] | None = None,
    ) -> dict[str, Any]:
        operations = list(operations or DEFAULT_CONTROLLER_OPERATIONS)
        logger.info("controller_generated", project_path=project_path, name=name)
        return {
            "success": True,
            "name": name,
            "outputDir": project_path,
            "files": [f"{project_path.rstrip('/')}/src/controllers/{name.lower()}.controller.ts"],
            "message": (
                f"Successfully generated controller '{name}' for model "
                f"'{model_name}' with {len(operations)} operations"
            ),
        }
