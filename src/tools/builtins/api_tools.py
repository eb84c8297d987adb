from __future__ import annotations

from src.integrations.authentication import AuthenticationService
from src.integrations.notification import NotificationService
from src.tools.base import ToolDescriptor, ToolGroup, ToolInput, ToolOutput

AUTH_ACTIONS = ("login", "logout", "refreshToken", "verifyToken")
NOTIFICATION_CHANNELS = ("email", "sms", "push", "in-app")


def create_api_tools(
    auth_service: AuthenticationService,
    notification_service: NotificationService,
) -> list[ToolDescriptor]:
    """Tools fronting the ARC API microservices (authentication, notification)."""

    async def authenticate(arguments: ToolInput) -> ToolOutput:
        action = arguments.get("action")
        token = arguments.get("token")
        if action == "login":
            return await auth_service.login(arguments.get("credentials"))
        if action == "logout":
            return await auth_service.logout(token)
        if action == "refreshToken":
            return await auth_service.refresh_token(token)
        if action == "verifyToken":
            return await auth_service.verify_token(token)
        raise ValueError(f"Unknown action: {action}")

    async def notify(arguments: ToolInput) -> ToolOutput:
        return await notification_service.send_notification(
            arguments["channel"],
            arguments["recipient"],
            arguments.get("subject"),
            arguments.get("body"),
            arguments.get("data"),
        )

    return [
        ToolDescriptor(
            id="arc.api.authentication",
            name="Authentication Service",
            description="Manage authentication and authorization for ARC applications",
            group=ToolGroup.api,
            parameters={
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "enum": list(AUTH_ACTIONS),
                        "description": "The authentication action to perform",
                    },
                    "credentials": {
                        "type": "object",
                        "properties": {
                            "username": {"type": "string"},
                            "password": {"type": "string"},
                        },
                    },
                    "token": {"type": "string"},
                },
                "required": ["action"],
            },
            handler=authenticate,
        ),
        ToolDescriptor(
            id="arc.api.notification",
            name="Notification Service",
            description="Send notifications across multiple channels in ARC applications",
            group=ToolGroup.api,
            parameters={
                "type": "object",
                "properties": {
                    "channel": {
                        "type": "string",
                        "enum": list(NOTIFICATION_CHANNELS),
                        "description": "The notification channel to use",
                    },
                    "recipient": {"type": "string"},
                    "subject": {"type": "string"},
                    "body": {"type": "string"},
                    "data": {"type": "object"},
                },
                "required": ["channel", "recipient"],
            },
            handler=notify,
        ),
    ]
