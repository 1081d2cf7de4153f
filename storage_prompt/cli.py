"""CLI entry point for storage-prompt."""

from __future__ import annotations

import os
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

import storage_prompt
from storage_prompt.core.actions import (
    ConsoleActionTargets,
    ConsolePromptSurface,
    FixedChoiceSurface,
    PromptAction,
    PromptSurface,
)
from storage_prompt.data.store import DataStore
from storage_prompt.logging_utils import LOG_LEVELS, setup_logging
from storage_prompt.providers import SnapshotStorageProvider, load_snapshot

app = typer.Typer(
    name="storage-prompt",
    help="New removable storage detection and prompt flow.",
    no_args_is_help=True,
)
console = Console()

_CHOICES = ("ask", "browse", "adopt", "eject", "cancel")
_CONFIG_KEYS = ("log_level", "default_choice")

_DB_OPTION = typer.Option(
    None, "--db", help="SQLite database path (default ~/.storage-prompt/data.db)"
)


def _resolve_log_level(log_level: Optional[str], store: DataStore) -> str:
    """Resolve log level from CLI flag → env var → config → default."""
    if log_level:
        return log_level
    env_level = os.environ.get("STORAGE_PROMPT_LOG_LEVEL")
    if env_level:
        return env_level
    return store.get_config("log_level") or "WARNING"


def _resolve_surface(choice: Optional[str], store: DataStore) -> PromptSurface:
    """Resolve the prompt surface from CLI flag → config → interactive."""
    resolved = (choice or store.get_config("default_choice") or "ask").lower()
    if resolved not in _CHOICES:
        console.print(
            f"[red]Unknown choice: {resolved}. "
            f"Valid choices: {', '.join(_CHOICES)}[/]"
        )
        raise typer.Exit(1)
    if resolved == "ask":
        return ConsolePromptSurface(console)
    if resolved == "cancel":
        return FixedChoiceSurface(None)
    return FixedChoiceSurface(PromptAction(resolved))


def _setup(log_level: Optional[str], store: DataStore) -> None:
    try:
        setup_logging(_resolve_log_level(log_level, store))
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


def _load_provider(
    snapshot: str, store: DataStore
) -> tuple[SnapshotStorageProvider, dict[str, Any]]:
    try:
        data = load_snapshot(snapshot)
        provider = SnapshotStorageProvider.from_dict(data, record_source=store)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot load snapshot: {e}[/]")
        raise typer.Exit(1)
    return provider, data


@app.command()
def simulate(
    snapshot: str = typer.Argument(
        ..., help="JSON snapshot with disks, volumes, records and events"
    ),
    choice: Optional[str] = typer.Option(
        None, "--choice", "-c",
        help="Answer every prompt with: " + ", ".join(_CHOICES),
    ),
    db: Optional[str] = _DB_OPTION,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (DEBUG, INFO, WARNING, ...)"
    ),
) -> None:
    """Replay storage events from a snapshot and run any resulting prompts."""
    from storage_prompt.core.classifier import StorageEventClassifier
    from storage_prompt.core.prompt_flow import PromptFlow
    from storage_prompt.core.receiver import StorageEventReceiver

    store = DataStore(db)
    try:
        _setup(log_level, store)
        provider, data = _load_provider(snapshot, store)
        surface = _resolve_surface(choice, store)
        targets = ConsoleActionTargets(console)

        flows: list[PromptFlow] = []

        def launch(request) -> None:
            flow = PromptFlow(request, targets, provider=provider)
            flows.append(flow)
            flow.run(surface)

        receiver = StorageEventReceiver(StorageEventClassifier(provider), launch)

        table = Table(title="Storage Events")
        table.add_column("#", style="dim")
        table.add_column("Event", style="cyan")
        table.add_column("Target")
        table.add_column("Outcome", style="green")

        for i, raw in enumerate(data.get("events", []), 1):
            if not isinstance(raw, dict):
                console.print(f"[yellow]Skipping event {i}: not an object[/]")
                continue
            payload = dict(raw)
            action = str(payload.pop("action", ""))
            request = receiver.on_receive(action, payload)
            target = payload.get("volume_id") or payload.get("disk_id") or ""
            if request is None:
                outcome = "no prompt"
            else:
                flow = flows[-1]
                outcome = flow.state.value
                if flow.dispatched_action is not None:
                    outcome += f" ({flow.dispatched_action.value})"
            table.add_row(str(i), action, str(target), outcome)

        console.print(table)
    finally:
        store.close()


@app.command()
def prompt(
    snapshot: str = typer.Argument(
        ..., help="JSON snapshot with disks, volumes and records"
    ),
    volume: Optional[str] = typer.Option(None, "--volume", "-v", help="Volume id"),
    disk: Optional[str] = typer.Option(None, "--disk", "-d", help="Disk id"),
    choice: Optional[str] = typer.Option(
        None, "--choice", "-c",
        help="Answer the prompt with: " + ", ".join(_CHOICES),
    ),
    db: Optional[str] = _DB_OPTION,
) -> None:
    """Open the new-storage prompt for a specific volume and/or disk."""
    from storage_prompt.core.errors import StoragePromptError
    from storage_prompt.core.prompt_flow import FlowState, PromptFlow, build_request

    store = DataStore(db)
    try:
        _setup(None, store)
        provider, _ = _load_provider(snapshot, store)
        try:
            request = build_request(provider, volume_id=volume, disk_id=disk)
        except StoragePromptError as e:
            console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

        surface = _resolve_surface(choice, store)
        flow = PromptFlow(request, ConsoleActionTargets(console), provider=provider)
        state = flow.run(surface)
        if state is FlowState.DISPATCHED:
            console.print("[green]Prompt dispatched.[/]")
        else:
            console.print("[yellow]Prompt cancelled.[/]")
    finally:
        store.close()


@app.command()
def records(
    action: str = typer.Argument(
        "list", help="Action: list, snooze, unsnooze, init or forget"
    ),
    fs_uuid: Optional[str] = typer.Argument(None, help="Filesystem UUID"),
    nickname: Optional[str] = typer.Option(
        None, "--nickname", "-n", help="Display name for the volume"
    ),
    db: Optional[str] = _DB_OPTION,
) -> None:
    """View or modify the volume record history."""
    store = DataStore(db)
    try:
        if action == "list":
            rows = store.list_records()
            if not rows:
                console.print("[yellow]No volume records.[/]")
                return
            table = Table(title="Volume Records")
            table.add_column("UUID", style="cyan")
            table.add_column("Inited")
            table.add_column("Snoozed")
            table.add_column("Nickname", style="green")
            for r in rows:
                table.add_row(
                    r.fs_uuid,
                    "yes" if r.inited else "no",
                    "yes" if r.snoozed else "no",
                    r.nickname or "",
                )
            console.print(table)
            return

        if not fs_uuid:
            console.print(
                f"[red]Usage: storage-prompt records {action} <uuid>[/]"
            )
            raise typer.Exit(1)

        if action == "snooze":
            store.upsert_record(fs_uuid, snoozed=True, nickname=nickname)
        elif action == "unsnooze":
            store.upsert_record(fs_uuid, snoozed=False, nickname=nickname)
        elif action == "init":
            store.upsert_record(fs_uuid, inited=True, nickname=nickname)
        elif action == "forget":
            if not store.delete_record(fs_uuid):
                console.print(f"[yellow]No record for {fs_uuid}[/]")
                return
        else:
            console.print(
                "[red]Unknown action. Use list, snooze, unsnooze, init or forget.[/]"
            )
            raise typer.Exit(1)
        console.print(f"[green]{action}: {fs_uuid}[/]")
    finally:
        store.close()


@app.command()
def config(
    action: str = typer.Argument(
        "get", help="Action: get or set"
    ),
    key: Optional[str] = typer.Argument(
        None, help="Config key (log_level, default_choice)"
    ),
    value: Optional[str] = typer.Argument(
        None, help="Value to set"
    ),
    db: Optional[str] = _DB_OPTION,
) -> None:
    """View or modify configuration."""
    store = DataStore(db)
    try:
        if action == "get":
            if key:
                val = store.get_config(key)
                if val is not None:
                    console.print(f"{key} = {val}")
                else:
                    console.print(f"[yellow]{key} is not set[/]")
            else:
                for k in _CONFIG_KEYS:
                    val = store.get_config(k)
                    console.print(f"{k} = {val or '(not set)'}")
        elif action == "set":
            if not key or value is None:
                console.print("[red]Usage: storage-prompt config set <key> <value>[/]")
                raise typer.Exit(1)
            if key not in _CONFIG_KEYS:
                console.print(
                    f"[red]Unknown config key: {key}. "
                    f"Valid keys: {', '.join(_CONFIG_KEYS)}[/]"
                )
                raise typer.Exit(1)
            if key == "log_level" and value.upper() not in LOG_LEVELS:
                console.print(
                    f"[red]Log level must be one of {', '.join(LOG_LEVELS)}[/]"
                )
                raise typer.Exit(1)
            if key == "default_choice" and value.lower() not in _CHOICES:
                console.print(
                    f"[red]Default choice must be one of {', '.join(_CHOICES)}[/]"
                )
                raise typer.Exit(1)
            store.set_config(key, value)
            console.print(f"[green]Set {key} = {value}[/]")
        else:
            console.print("[red]Unknown action. Use 'get' or 'set'.[/]")
            raise typer.Exit(1)
    finally:
        store.close()


@app.command()
def version() -> None:
    """Print version."""
    console.print(f"storage-prompt {storage_prompt.__version__}")


if __name__ == "__main__":
    app()
