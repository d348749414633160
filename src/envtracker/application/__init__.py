"""Application services used by the CLI."""

from .services import ConfigureService, HookService, PushService

__all__ = ["ConfigureService", "HookService", "PushService"]
