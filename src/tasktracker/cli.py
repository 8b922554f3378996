"""tasktracker CLI - personal task tracking."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.json_storage import StorageError
from .config import load_config
from .core.tasks import InvalidArgument, Task
from .manager import TaskManager


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _not_found(task_id: str) -> None:
    click.echo(f"Task {task_id} not found.", err=True)
    sys.exit(1)


def _format_task(t: Task) -> str:
    due = f" (due {t.due_date.date().isoformat()})" if t.due_date else ""
    overdue = " OVERDUE" if t.is_overdue() else ""
    tags = f" [{', '.join(sorted(t.tags))}]" if t.tags else ""
    return f"{t.id[:8]}  {t.status.value:<11} {t.priority.name:<6} {t.title}{due}{overdue}{tags}"


@click.group()
@click.version_option()
@click.option("--storage", "storage_path", default=None, type=click.Path(dir_okay=False),
              help="Path to the task file (overrides config and TASKTRACKER_STORAGE)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, storage_path: str | None, debug: bool):
    """tasktracker - personal task tracking CLI."""
    config = load_config()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if (debug or config.debug) else logging.WARNING,
    )

    path = Path(storage_path).expanduser() if storage_path else config.storage_path
    ctx.obj = {"config": config, "storage_path": path, "manager": None}


def _manager(ctx) -> TaskManager:
    """Open the task store on first use, so --help never touches it."""
    if ctx.obj["manager"] is None:
        try:
            ctx.obj["manager"] = TaskManager(ctx.obj["storage_path"])
        except StorageError as e:
            _fail(str(e))
    return ctx.obj["manager"]


def _resolve_id(manager: TaskManager, task_id: str) -> str:
    """Expand a unique id prefix (as printed by `list`) to a full id."""
    if manager.get_task_details(task_id) is not None:
        return task_id
    matches = [t.id for t in manager.list_tasks() if t.id.startswith(task_id)]
    if len(matches) == 1:
        return matches[0]
    return task_id


@main.command()
@click.argument("title")
@click.option("-d", "--description", default="", help="Longer description")
@click.option("-p", "--priority", type=int, default=None, help="Priority: 1=low, 2=medium, 3=high")
@click.option("--due", default=None, help="Due date (YYYY-MM-DD)")
@click.option("-t", "--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_context
def add(ctx, title: str, description: str, priority: int | None, due: str | None, tags: tuple[str, ...]):
    """Add a new task."""
    if priority is None:
        priority = ctx.obj["config"].default_priority
    try:
        task_id = _manager(ctx).create_task(title, description, priority, due, list(tags))
    except (InvalidArgument, StorageError) as e:
        _fail(str(e))
    click.echo(f"Created task {task_id}")


@main.command("list")
@click.option("--status", "status_filter", default=None, help="Only tasks with this status")
@click.option("--priority", "priority_filter", type=int, default=None, help="Only tasks with this priority")
@click.option("--overdue", "show_overdue", is_flag=True, help="Only overdue tasks")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_cmd(ctx, status_filter: str | None, priority_filter: int | None, show_overdue: bool, as_json: bool):
    """List tasks (one filter at a time: --overdue, then --status, then --priority)."""
    try:
        tasks = _manager(ctx).list_tasks(status_filter, priority_filter, show_overdue)
    except InvalidArgument as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No tasks found.")
        return

    for task in tasks:
        click.echo(_format_task(task))


@main.command()
@click.argument("task_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, task_id: str, as_json: bool):
    """Show task details."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    task = manager.get_task_details(task_id)
    if task is None:
        _not_found(task_id)

    if as_json:
        click.echo(json.dumps(task.to_dict(), indent=2))
        return

    click.echo(f"ID:          {task.id}")
    click.echo(f"Title:       {task.title}")
    if task.description:
        click.echo(f"Description: {task.description}")
    click.echo(f"Status:      {task.status.value}")
    click.echo(f"Priority:    {task.priority.name} ({task.priority.value})")
    click.echo(f"Due:         {task.due_date.date().isoformat() if task.due_date else '-'}")
    click.echo(f"Tags:        {', '.join(sorted(task.tags)) or '-'}")
    click.echo(f"Created:     {task.created_at.isoformat(timespec='seconds')}")
    if task.completed_at:
        click.echo(f"Completed:   {task.completed_at.isoformat(timespec='seconds')}")
    if task.is_overdue():
        click.echo("This task is OVERDUE.")


@main.command()
@click.argument("task_id")
@click.argument("new_status")
@click.pass_context
def status(ctx, task_id: str, new_status: str):
    """Set task status (todo, in_progress, done, abandoned)."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.update_task_status(task_id, new_status)
    except (InvalidArgument, StorageError) as e:
        _fail(str(e))
    if not ok:
        _not_found(task_id)
    click.echo(f"Task {task_id} is now {new_status}.")


@main.command()
@click.argument("task_id")
@click.argument("new_priority", type=int)
@click.pass_context
def priority(ctx, task_id: str, new_priority: int):
    """Set task priority (1=low, 2=medium, 3=high)."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.update_task_priority(task_id, new_priority)
    except (InvalidArgument, StorageError) as e:
        _fail(str(e))
    if not ok:
        _not_found(task_id)
    click.echo(f"Task {task_id} priority set to {new_priority}.")


@main.command()
@click.argument("task_id")
@click.argument("due_date")
@click.pass_context
def due(ctx, task_id: str, due_date: str):
    """Set task due date (YYYY-MM-DD)."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.update_task_due_date(task_id, due_date)
    except (InvalidArgument, StorageError) as e:
        _fail(str(e))
    if not ok:
        _not_found(task_id)
    click.echo(f"Task {task_id} due {due_date}.")


@main.command()
@click.argument("task_id")
@click.pass_context
def delete(ctx, task_id: str):
    """Delete a task."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.delete_task(task_id)
    except StorageError as e:
        _fail(str(e))
    if not ok:
        _not_found(task_id)
    click.echo(f"Deleted task {task_id}.")


@main.command()
@click.argument("task_id")
@click.argument("tag")
@click.pass_context
def tag(ctx, task_id: str, tag: str):
    """Add a tag to a task."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.add_tag_to_task(task_id, tag)
    except StorageError as e:
        _fail(str(e))
    if not ok:
        _not_found(task_id)
    click.echo(f"Tagged task {task_id} with '{tag}'.")


@main.command()
@click.argument("task_id")
@click.argument("tag")
@click.pass_context
def untag(ctx, task_id: str, tag: str):
    """Remove a tag from a task."""
    manager = _manager(ctx)
    task_id = _resolve_id(manager, task_id)
    try:
        ok = manager.remove_tag_from_task(task_id, tag)
    except StorageError as e:
        _fail(str(e))
    if not ok:
        click.echo(f"Task {task_id} not found or has no tag '{tag}'.", err=True)
        sys.exit(1)
    click.echo(f"Removed tag '{tag}' from task {task_id}.")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx, as_json: bool):
    """Show task statistics."""
    statistics = _manager(ctx).get_statistics()

    if as_json:
        click.echo(json.dumps(statistics.to_dict(), indent=2))
        return

    click.echo(f"Total tasks: {statistics.total}\n")
    click.echo("By status:")
    for s, count in statistics.by_status.items():
        click.echo(f"  {s.value:<12} {count}")
    click.echo("\nBy priority:")
    for p, count in statistics.by_priority.items():
        click.echo(f"  {p.name:<12} {count}")
    click.echo(f"\nOverdue: {statistics.overdue}")
    click.echo(f"Completed in the last 7 days: {statistics.completed_last_week}")


@main.command("abandon-overdue")
@click.pass_context
def abandon_overdue(ctx):
    """Abandon tasks overdue by more than 7 days (HIGH priority is exempt)."""
    try:
        abandoned = _manager(ctx).abandon_overdue_tasks()
    except StorageError as e:
        _fail(str(e))

    if not abandoned:
        click.echo("No tasks abandoned.")
        return

    click.echo(f"Abandoned {len(abandoned)} task(s):")
    for task_id in abandoned:
        click.echo(f"  {task_id}")


if __name__ == "__main__":
    main()
