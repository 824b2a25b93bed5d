"""CLI: init, permissions, hierarchy, resolve, can-manage, validate."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rampart.auth.permissions import get_all_permissions, get_permission_description
from rampart.config import Config
from rampart.core.access import check_role_management, get_channel_access, get_server_access
from rampart.core.hierarchy import calculate_role_hierarchy
from rampart.models.permission import Permission
from rampart.models.snapshot import ServerSnapshot
from rampart.storage.snapshot import SnapshotError, load_snapshot


def _load(ctx: click.Context, path: str | None) -> ServerSnapshot:
    config: Config = ctx.obj
    snapshot_path = Path(path).expanduser() if path else config.snapshot_path
    try:
        return load_snapshot(snapshot_path)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _mark(value: bool) -> str:
    return "[green]✓[/green]" if value else "[red]✗[/red]"


@click.group()
@click.version_option(package_name="rampart")
@click.option("--home", type=click.Path(), default=None, help="Config directory (default ~/.rampart)")
@click.pass_context
def main(ctx: click.Context, home: str | None) -> None:
    """Rampart: resolve who may do what in a server."""
    config = Config.load(Path(home).expanduser() if home else None)
    logging.basicConfig(level=config.log_level.upper())
    ctx.obj = config


@main.command()
@click.pass_obj
def init(config: Config) -> None:
    """Write a default config file."""
    config.save()
    click.echo(f"Initialized config at {config.home / 'config.yaml'}")
    click.echo(f"Snapshot file: {config.snapshot_path}")


@main.command()
def permissions() -> None:
    """List every permission key."""
    table = Table(title="Permissions")
    table.add_column("Key", style="cyan")
    table.add_column("Description")
    for permission in get_all_permissions():
        table.add_row(permission.value, get_permission_description(permission))
    Console().print(table)


@main.command()
@click.argument("snapshot", type=click.Path(), required=False)
@click.pass_context
def hierarchy(ctx: click.Context, snapshot: str | None) -> None:
    """Show the server's roles, most senior first."""
    data = _load(ctx, snapshot)

    table = Table(title=f"Role hierarchy: {data.server_id}")
    table.add_column("#", style="magenta")
    table.add_column("Role", style="cyan")
    table.add_column("Position")
    table.add_column("ID")
    table.add_column("Grants", style="green")
    for index, role in enumerate(calculate_role_hierarchy(data.server_roles), start=1):
        grants = ", ".join(p.value for p in Permission if role.has(p))
        position = "-" if role.position is None else str(role.position)
        table.add_row(str(index), role.name, position, role.id, grants)
    Console().print(table)


@main.command()
@click.argument("snapshot", type=click.Path(), required=False)
@click.option("--user", "user_id", required=True, help="User to evaluate")
@click.option("--channel", "channel_id", default=None, help="Channel to evaluate (server-wide if omitted)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def resolve(
    ctx: click.Context, snapshot: str | None, user_id: str, channel_id: str | None, as_json: bool
) -> None:
    """Resolve a user's effective permissions."""
    data = _load(ctx, snapshot)
    if channel_id:
        access = get_channel_access(data, channel_id, user_id)
    else:
        access = get_server_access(data, user_id)

    if as_json:
        click.echo(json.dumps(access.to_response(), indent=2))
        return

    scope = f"channel {channel_id}" if channel_id else f"server {data.server_id}"
    table = Table(title=f"{user_id} in {scope}")
    table.add_column("Permission", style="cyan")
    table.add_column("Granted")
    for permission in get_all_permissions():
        table.add_row(permission.value, _mark(access.permissions.get(permission)))

    console = Console()
    console.print(
        Panel(
            f"Owner: {_mark(access.is_server_owner)}  Member: {_mark(access.is_member)}",
            title="Standing",
        )
    )
    console.print(table)


@main.command("can-manage")
@click.argument("snapshot", type=click.Path(), required=False)
@click.option("--actor", "actor_id", required=True, help="User attempting the change")
@click.option("--role", "role_id", required=True, help="Role being created, edited, deleted or assigned")
@click.pass_context
def can_manage(ctx: click.Context, snapshot: str | None, actor_id: str, role_id: str) -> None:
    """Check whether a user may manage a role."""
    data = _load(ctx, snapshot)
    if data.get_role(role_id) is None:
        click.echo(f"Error: Role {role_id} not found in server {data.server_id}", err=True)
        sys.exit(1)

    if check_role_management(data, actor_id, role_id):
        click.echo(f"allowed: {actor_id} may manage role {role_id}")
    else:
        click.echo(f"denied: {actor_id} may not manage role {role_id}")


@main.command()
@click.argument("snapshot", type=click.Path(), required=False)
@click.pass_context
def validate(ctx: click.Context, snapshot: str | None) -> None:
    """Report overrides that would be rejected on write."""
    data = _load(ctx, snapshot)
    known_roles = {role.id for role in data.server_roles}

    failures = 0
    for override in data.overrides:
        issues = override.problems()
        if override.role_id and override.role_id not in known_roles:
            issues.append(f"role {override.role_id} does not exist")
        if data.channels and override.channel_id not in data.channels:
            issues.append(f"channel {override.channel_id} does not exist")
        if issues:
            failures += 1
            for issue in issues:
                click.echo(f"{override.id}: {issue}", err=True)

    if failures:
        click.echo(f"{failures} of {len(data.overrides)} override(s) invalid", err=True)
        sys.exit(1)
    click.echo(f"All {len(data.overrides)} override(s) valid")
