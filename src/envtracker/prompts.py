"""Interactive prompts used by the post-push handler."""

from dataclasses import dataclass

from rich.console import Console
from rich.prompt import Confirm, Prompt

VERSION_TAG_CHOICES = ["major", "minor", "patch"]
ENVIRONMENT_CHOICES = ["dev", "staging", "preprod", "production"]


@dataclass(slots=True)
class PushArgs:
    version_tag: str
    environment: str
    track_author: bool


def prompt_for_push_args(console: Console | None = None) -> PushArgs:
    """Ask for the version tag, environment and author tracking"""
    version_tag = Prompt.ask(
        "What version tag?", choices=VERSION_TAG_CHOICES, default="patch", console=console
    )
    environment = Prompt.ask("Which environment?", choices=ENVIRONMENT_CHOICES, console=console)
    track_author = Confirm.ask("Track the author?", default=False, console=console)
    return PushArgs(version_tag=version_tag, environment=environment, track_author=track_author)
