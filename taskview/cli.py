"""
TaskView CLI — Run the app, the demo API, and one-off fetches.

Commands:
- taskview run        — Start the Reflex dev server
- taskview serve-api  — Serve GET /api/tasks from a seed file (uvicorn)
- taskview fetch      — Load the task list once and print one page
- taskview check      — Validate taskview.yaml
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional

logger = logging.getLogger("taskview.cli")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="taskview",
        description="TaskView — browser-rendered task list",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # taskview run
    run_parser = subparsers.add_parser("run", help="Start the Reflex dev server")
    run_parser.add_argument("--host", default="0.0.0.0", help="Backend host to bind (default: 0.0.0.0)")
    run_parser.add_argument("--port", type=int, default=3001, help="Frontend port (default: 3001)")
    run_parser.add_argument("--backend-port", type=int, default=8000, help="Backend port (default: 8000)")
    run_parser.add_argument("--env", choices=["dev", "prod"], default="dev", help="Environment (default: dev)")

    # taskview serve-api
    api_parser = subparsers.add_parser("serve-api", help="Serve the demo task API")
    api_parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    api_parser.add_argument("--port", type=int, default=3000, help="Port (default: 3000)")
    api_parser.add_argument("--seed", help="JSON file with the task collection to serve")

    # taskview fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch tasks once and print a page")
    fetch_parser.add_argument("--config", default=None, help="Path to taskview.yaml")
    fetch_parser.add_argument("--search", default="", help="Free-text search term")
    fetch_parser.add_argument("--page", type=int, default=1, help="Page number (clamped)")

    # taskview check
    check_parser = subparsers.add_parser("check", help="Validate taskview.yaml")
    check_parser.add_argument("--config", default=None, help="Path to taskview.yaml")

    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "serve-api":
        return cmd_serve_api(args)
    elif args.command == "fetch":
        return cmd_fetch(args)
    elif args.command == "check":
        return cmd_check(args)
    else:
        parser.print_help()
        return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Start the Reflex dev server."""
    import subprocess

    print("Starting TaskView (Reflex) server...")
    try:
        cmd = [
            "reflex", "run",
            "--backend-host", args.host,
            "--frontend-port", str(args.port),
            "--backend-port", str(args.backend_port),
            "--env", args.env,
        ]
        result = subprocess.run(cmd, check=True)
        return result.returncode
    except FileNotFoundError:
        print("[ERROR] 'reflex' command not found. Install: pip install reflex")
        return 1
    except subprocess.CalledProcessError as e:
        print(f"[ERROR] reflex exited with status {e.returncode}")
        return e.returncode
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0


def cmd_serve_api(args: argparse.Namespace) -> int:
    """Run the demo API with uvicorn."""
    import uvicorn

    from taskview.api.server import create_app, load_seed_tasks
    from taskview.engine.errors import TaskViewConfigError
    from taskview.engine.logging import configure_logging

    configure_logging()
    try:
        tasks = load_seed_tasks(args.seed) if args.seed else None
        api = create_app(tasks)
    except TaskViewConfigError as e:
        print(f"[ERROR] {e.message}")
        return 1

    print(f"Serving tasks on http://{args.host}:{args.port}/api/tasks")
    uvicorn.run(api, host=args.host, port=args.port)
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    """Load once, apply search + page, print the page and summary."""
    from taskview.engine.config import load_config
    from taskview.engine.errors import TaskViewConfigError
    from taskview.engine.logging import configure_logging
    from taskview.tasks.loader import TaskLoader
    from taskview.tasks.session import TaskListSession

    try:
        config = load_config(args.config)
    except TaskViewConfigError as e:
        print(f"[ERROR] {e.message}")
        return 1
    configure_logging(config.logging.level)

    session = TaskListSession(
        page_size=config.pagination.page_size,
        page_window_size=config.pagination.page_window,
    )
    loader = TaskLoader.from_config(config)
    result = asyncio.run(session.load(loader))

    if result.is_failed:
        print(f"[ERROR] {result.error}")
        return 1

    session.set_search_term(args.search)
    session.set_page(args.page)

    page = session.page
    if page.is_empty:
        print("No tasks match." if args.search else "No tasks.")
    for task in page.items:
        print(f"[{task.id}] {task.title}  ({task.status}, {task.priority}, due {task.due_date or '—'})")
    if page.total_pages > 1:
        print(f"Page {page.number} of {page.total_pages}")
    print(session.summary())
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate taskview.yaml and print the effective settings."""
    from taskview.engine.config import load_config
    from taskview.engine.errors import TaskViewConfigError

    try:
        config = load_config(args.config)
    except TaskViewConfigError as e:
        print(f"[ERROR] {e.message}")
        for err in e.context.get("errors", []):
            loc = ".".join(str(p) for p in err.get("loc", ()))
            print(f"  - {loc}: {err.get('msg')}")
        return 1

    print(f"[OK] {config.name} {config.version} ({config.environment})")
    print(f"  tasks url:  {config.api.tasks_url}")
    print(f"  page size:  {config.pagination.page_size}")
    print(f"  theme:      {config.ui.theme}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
