#!/usr/bin/env python3
"""
Stockflow management CLI.

Usage:
    python manage.py serve       Start the API server (migrates on startup)
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Show migration status
    python manage.py verify      Verify schema integrity
    python manage.py sweep       Run one stock sweep and exit
"""

import argparse
import asyncio
import sys

from stockflow.config import configure_logging, get_settings


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn in the foreground."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    print(f"Starting server on {host}:{port}...")
    # One worker: the live session registry and product locks are per process
    uvicorn.run(
        "stockflow.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_config=None,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database(create_backup_before=not args.no_backup))
    if not results:
        print("Database is up to date")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Show migration status."""
    from stockflow.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status())
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")


def cmd_verify(args: argparse.Namespace) -> None:
    """Verify schema integrity."""
    from stockflow.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity())
    failed = False
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            failed = True
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")
    if failed:
        sys.exit(1)


def cmd_sweep(args: argparse.Namespace) -> None:
    """Evaluate every product once; alerts are persisted, not pushed live."""
    from stockflow.application.services import build_stock_services
    from stockflow.infrastructure.storage.sqlite import close_pool
    from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

    async def run() -> None:
        await initialize_database(create_backup_before=False)
        services = await build_stock_services()
        try:
            result = await services.sweeper.run_once()
            await services.dispatcher.drain()
        finally:
            await close_pool()
        print(f"Checked {result.checked} products, {result.alerts} alerts")

    asyncio.run(run())


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stockflow management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # verify
    p_verify = sub.add_parser("verify", help="Verify schema integrity")
    p_verify.set_defaults(func=cmd_verify)

    # sweep
    p_sweep = sub.add_parser("sweep", help="Run one stock sweep")
    p_sweep.set_defaults(func=cmd_sweep)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
