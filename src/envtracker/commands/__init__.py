"""
env-version-tracker Commands

Command implementations for the evt CLI. The CLI layer (cli.py) acts as a thin
routing layer over these modules through the application services.
"""

from .config import ConfigureResult, configure_storage
from .hooks import HookInstallation, remove_hook, setup_hook, setup_push_alias
from .push import PushResult, push_version

__all__ = [
    "configure_storage",
    "ConfigureResult",
    "push_version",
    "PushResult",
    "setup_hook",
    "setup_push_alias",
    "remove_hook",
    "HookInstallation",
]
