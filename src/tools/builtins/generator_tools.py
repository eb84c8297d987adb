from __future__ import annotations

from src.integrations.project_generator import (
    DEFAULT_CONTROLLER_OPERATIONS,
    DEFAULT_OUTPUT_DIR,
    ProjectGeneratorService,
)
from src.tools.base import ToolDescriptor, ToolGroup, ToolInput, ToolOutput

MICROSERVICE_FEATURES = (
    "authentication",
    "authorization",
    "database",
    "caching",
    "messaging",
    "notification",
    "api",
    "healthcheck",
)
CONTROLLER_OPERATIONS = ("create", "read", "update", "delete", "count", "findById")

_RELATION_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "type": {
            "type": "string",
            "enum": ["hasOne", "hasMany", "belongsTo", "hasAndBelongsToMany"],
        },
        "model": {"type": "string"},
    },
}


def create_generator_tools(generator: ProjectGeneratorService) -> list[ToolDescriptor]:
    """Scaffolding tools for ARC microservices, models and controllers."""

    async def microservice(arguments: ToolInput) -> ToolOutput:
        return await generator.generate_microservice(
            arguments["name"],
            arguments.get("description", ""),
            arguments["features"],
            arguments.get("models") or [],
            arguments.get("outputDir") or DEFAULT_OUTPUT_DIR,
        )

    async def model(arguments: ToolInput) -> ToolOutput:
        return await generator.generate_model(
            arguments["projectPath"],
            arguments["name"],
            arguments["properties"],
            arguments.get("relations") or [],
        )

    async def controller(arguments: ToolInput) -> ToolOutput:
        return await generator.generate_controller(
            arguments["projectPath"],
            arguments["name"],
            arguments["modelName"],
            arguments.get("operations") or list(DEFAULT_CONTROLLER_OPERATIONS),
        )

    return [
        ToolDescriptor(
            id="arc.generator.microservice",
            name="ARC Microservice Generator",
            description=(
                "Generate scaffolding for a new ARC microservice including "
                "models, controllers, and repositories"
            ),
            group=ToolGroup.generator,
            parameters={
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Name of the microservice"},
                    "description": {
                        "type": "string",
                        "description": "Description of the microservice functionality",
                    },
                    "features": {
                        "type": "array",
                        "items": {"type": "string", "enum": list(MICROSERVICE_FEATURES)},
                        "description": "List of features to include in the microservice",
                    },
                    "models": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "properties": {"type": "object"},
                                "relations": {"type": "array", "items": _RELATION_SCHEMA},
                            },
                            "required": ["name"],
                        },
                        "description": "Data models to generate",
                    },
                    "outputDir": {
                        "type": "string",
                        "description": "Directory where the project should be generated",
                        "default": DEFAULT_OUTPUT_DIR,
                    },
                },
                "required": ["name", "features"],
            },
            handler=microservice,
        ),
        ToolDescriptor(
            id="arc.generator.model",
            name="ARC Model Generator",
            description="Generate a new data model for an existing ARC project",
            group=ToolGroup.generator,
            parameters={
                "type": "object",
                "properties": {
                    "projectPath": {
                        "type": "string",
                        "description": "Path to the existing ARC project",
                    },
                    "name": {"type": "string", "description": "Name of the model"},
                    "properties": {
                        "type": "object",
                        "description": "Model properties as key-value pairs (name: type)",
                    },
                    "relations": {
                        "type": "array",
                        "items": _RELATION_SCHEMA,
                        "description": "Relationships to other models",
                    },
                },
                "required": ["projectPath", "name", "properties"],
            },
            handler=model,
        ),
        ToolDescriptor(
            id="arc.generator.controller",
            name="ARC Controller Generator",
            description="Generate a new controller for an existing ARC project",
            group=ToolGroup.generator,
            parameters={
                "type": "object",
                "properties": {
                    "projectPath": {
                        "type": "string",
                        "description": "Path to the existing ARC project",
                    },
                    "name": {"type": "string", "description": "Name of the controller"},
                    "modelName": {
                        "type": "string",
                        "description": "Name of the model this controller will manage",
                    },
                    "operations": {
                        "type": "array",
                        "items": {"type": "string", "enum": list(CONTROLLER_OPERATIONS)},
                        "description": "CRUD operations to include in the controller",
                        "default": list(DEFAULT_CONTROLLER_OPERATIONS),
                    },
                },
                "required": ["projectPath", "name", "modelName"],
            },
            handler=controller,
        ),
    ]
