"""Terminal front end for the task board.

Each command loads the board from the API, applies one user action through
the reconciler and waits for the background call before exiting.
"""
import logging

import click
import requests

from api_client import DEFAULT_API_URL, ApiError, TaskApi
from board import Board
from identity import CookieIdentity

HEADER_TITLES = {"todo": "TASKS", "in-progress": "IN PROGRESS", "done": "DONE"}


def _render(board):
    for col in board.columns:
        click.secho(f"{HEADER_TITLES.get(col.id, col.title)} ({len(col.tasks)})", bold=True)
        if not col.tasks:
            click.secho("  (empty)", dim=True)
        for task in col.tasks:
            day = (task.created_at or "").split("T")[0]
            click.echo(f"  {task.id}  {task.content}" + (f"  [{day}]" if day else ""))
        click.echo()


def _load(board):
    try:
        board.load()
    except (ApiError, requests.RequestException) as e:
        raise click.ClickException(f"Could not load board: {e}")


def _wait(future):
    # Surface the background call's outcome since the process is about to exit
    if future is None:
        return
    try:
        future.result()
    except Exception as e:
        raise click.ClickException(str(e))


@click.group()
@click.option("--api-url", envvar="TASKBOARD_API_URL", default=DEFAULT_API_URL, show_default=True)
@click.option("--cookie-file", envvar="TASKBOARD_COOKIE_FILE", type=click.Path(dir_okay=False), default=None)
@click.option("-v", "--verbose", is_flag=True, help="Log API traffic.")
@click.pass_context
def main(ctx, api_url, cookie_file, verbose):
    """Personal task board: Tasks, In Progress, Done."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    api = TaskApi(CookieIdentity(cookie_file), base_url=api_url)
    board = Board(api)
    ctx.call_on_close(board.close)
    ctx.obj = board


@main.command()
@click.pass_obj
def show(board):
    """Print the three columns."""
    _load(board)
    _render(board)


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def add(board, text):
    """Add a task to the Tasks column."""
    _load(board)
    future = board.add_task(" ".join(text))
    if future is None:
        raise click.UsageError("Task text cannot be empty.")
    _wait(future)
    _render(board)


@main.command()
@click.argument("task_id")
@click.argument("over_id")
@click.pass_obj
def move(board, task_id, over_id):
    """Drop TASK_ID onto OVER_ID (another task's id or a column id)."""
    _load(board)
    if board.find_column(task_id) is None:
        raise click.ClickException(f"Task {task_id} not found.")
    board.drag_start(task_id)
    board.drag_over(over_id)
    future = board.drag_end(over_id)
    if future is None:
        click.echo("Nothing to move.")
    _wait(future)
    _render(board)


@main.command()
@click.argument("task_id")
@click.pass_obj
def delete(board, task_id):
    """Delete a task."""
    try:
        board.api.delete_task(task_id)
    except (ApiError, requests.RequestException) as e:
        raise click.ClickException(str(e))
    _load(board)
    _render(board)


if __name__ == "__main__":
    main()
