"""Downstream action targets and user-interaction surfaces for the prompt flow."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel


class PromptAction(Enum):
    BROWSE = "browse"
    ADOPT = "adopt"
    EJECT = "eject"


@dataclass(frozen=True)
class Choice:
    action: PromptAction
    title: str


@dataclass(frozen=True)
class Prompt:
    title: str
    description: str
    icon: str
    choices: tuple[Choice, ...] = field(default_factory=tuple)


class ActionTargets(ABC):
    """Other screens the prompt hands off to."""

    @abstractmethod
    def open_storage_browser(self) -> None: ...

    @abstractmethod
    def start_format_as_private(self, disk_id: str) -> None: ...

    @abstractmethod
    def start_unmount(self, volume_id: str, description: str) -> None: ...


class PromptSurface(ABC):
    """Presents a prompt and reports the chosen action, or None if abandoned."""

    @abstractmethod
    def choose(self, prompt: Prompt) -> Optional[PromptAction]: ...


class ConsoleActionTargets(ActionTargets):
    """Prints the hand-off instead of launching another screen."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def open_storage_browser(self) -> None:
        self.console.print("[bold cyan]→ Opening storage browser[/]")

    def start_format_as_private(self, disk_id: str) -> None:
        self.console.print(
            f"[bold cyan]→ Formatting {disk_id} as device storage[/]"
        )

    def start_unmount(self, volume_id: str, description: str) -> None:
        self.console.print(
            f"[bold cyan]→ Ejecting {description} ({volume_id})[/]"
        )


class ConsolePromptSurface(PromptSurface):
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def choose(self, prompt: Prompt) -> Optional[PromptAction]:
        from rich.prompt import Prompt as RichPrompt

        self.console.print()
        self.console.print(
            Panel(
                prompt.description,
                title=f":{prompt.icon}: {prompt.title}",
                border_style="blue",
            )
        )
        for i, choice in enumerate(prompt.choices, 1):
            self.console.print(f"  [cyan]{i}.[/] {choice.title}")
        self.console.print("  [cyan]0.[/] Back")

        valid = [str(i) for i in range(len(prompt.choices) + 1)]
        try:
            answer = RichPrompt.ask(
                "Enter your choice", choices=valid, console=self.console,
            )
        except (KeyboardInterrupt, EOFError):
            return None
        idx = int(answer)
        if idx == 0:
            return None
        return prompt.choices[idx - 1].action


class FixedChoiceSurface(PromptSurface):
    """Non-interactive surface that always answers with the same choice."""

    def __init__(self, action: Optional[PromptAction]):
        self.action = action
        self.prompts: list[Prompt] = []

    def choose(self, prompt: Prompt) -> Optional[PromptAction]:
        self.prompts.append(prompt)
        return self.action
