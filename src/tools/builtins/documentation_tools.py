from __future__ import annotations

from src.integrations.documentation import DOC_CATEGORIES, DocumentationService
from src.tools.base import ToolDescriptor, ToolGroup, ToolInput, ToolOutput

DEFAULT_MAX_RESULTS = 5


def create_documentation_tools(docs: DocumentationService) -> list[ToolDescriptor]:
    async def search(arguments: ToolInput) -> ToolOutput:
        query = arguments["query"]
        results = await docs.search(
            query,
            arguments.get("category") or "all",
            arguments.get("maxResults", DEFAULT_MAX_RESULTS),
        )
        return {
            "results": [r.to_dict() for r in results],
            "totalCount": len(results),
            "query": query,
        }

    return [
        ToolDescriptor(
            id="arc.docs.search",
            name="ARC Documentation Search",
            description=(
                "Search the ARC documentation for specific topics, concepts, or components"
            ),
            group=ToolGroup.docs,
            parameters={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The search query for ARC documentation",
                    },
                    "category": {
                        "type": "string",
                        "enum": [*DOC_CATEGORIES, "all"],
                        "description": "Specific category of documentation to search within",
                        "default": "all",
                    },
                    "maxResults": {
                        "type": "integer",
                        "minimum": 1,
                        "description": "Maximum number of results to return",
                        "default": DEFAULT_MAX_RESULTS,
                    },
                },
                "required": ["query"],
            },
            handler=search,
        ),
    ]
