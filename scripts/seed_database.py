#!/usr/bin/env python3
"""
CLI script to migrate and seed the database.

Usage:
    # Seed tips and the demo user
    python scripts/seed_database.py

    # Apply migrations first
    python scripts/seed_database.py --migrate

    # Replace the existing tips
    python scripts/seed_database.py --clear

    # Seed tips only
    python scripts/seed_database.py --skip-demo-user

    # Seed the production database
    python scripts/seed_database.py --config production.toml
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ecotrack.core.config import get_config
from ecotrack.core.security import build_password_hasher
from ecotrack.database.base import apply_db_migration, get_db_url, get_engine_kw
from ecotrack.database.session_manager.db_session import Database
from ecotrack.services.seed_database import DEMO_EMAIL, DatabaseSeeder
from ecotrack.utils.constants import ConfigFile

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

console = Console()


def print_header(text: str, style: str = "bold cyan"):
    """Print a formatted header using Rich Panel."""
    console.print(
        Panel(
            Text(text, justify="center", style=style),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def print_config(args):
    """Print configuration details."""
    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Setting", style="bold yellow")
    config_table.add_column("Value", style="green")

    config_table.add_row("⚙️  Config File", args.config)
    config_table.add_row("🧱 Run Migrations", "Yes" if args.migrate else "No")
    config_table.add_row("🗑️  Clear Tips", "Yes" if args.clear else "No")
    config_table.add_row("👤 Demo User", "No" if args.skip_demo_user else DEMO_EMAIL)

    console.print(config_table)
    console.print()


def print_stats(stats: dict):
    """Print seeding statistics using Rich Table."""
    print_header("SEEDING STATISTICS", "bold green")

    stats_table = Table(show_header=True, box=None, padding=(0, 2))
    stats_table.add_column("Item", style="bold cyan", width=30)
    stats_table.add_column("Count", justify="right", style="bold green")

    stats_table.add_row("💡 Tips Created", str(stats["tips"]))
    stats_table.add_row("⏭️  Tips Already Present", str(stats["tips_skipped"]))
    stats_table.add_row("👤 Demo User Created", "Yes" if stats["demo_user"] else "No")

    console.print(stats_table)
    console.print()


async def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(description="Seed the database with tips and a demo user")
    parser.add_argument(
        "--config",
        type=str,
        default=ConfigFile.DEVELOPMENT,
        help="Config file in ecotrack/cfg (default: development.toml)",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Apply Alembic migrations before seeding",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing tips before seeding",
    )
    parser.add_argument(
        "--skip-demo-user",
        action="store_true",
        help="Do not create the demo account",
    )
    parser.add_argument(
        "--demo-password",
        type=str,
        default="demo123",
        help="Password for the demo account (default: demo123)",
    )

    args = parser.parse_args()

    print_header("DATABASE SEEDING", "bold cyan")
    print_config(args)

    database = None
    try:
        config = get_config(args.config)
        if args.migrate:
            with console.status("[bold cyan]Applying migrations...", spinner="dots"):
                await apply_db_migration(config)

        async_db_url = get_db_url(config)
        database = Database(async_db_url, engine_kw=get_engine_kw(async_db_url))

        with console.status("[bold cyan]Seeding database...", spinner="dots"):
            async with DatabaseSeeder(database, build_password_hasher(config)) as seeder:
                stats = await seeder.seed_all(
                    clear_existing=args.clear,
                    demo_password=None if args.skip_demo_user else args.demo_password,
                )

        print_stats(stats)
        console.print(
            Panel(
                Text("✅ SEEDING COMPLETED SUCCESSFULLY", justify="center"),
                border_style="bold green",
                style="bold green",
            )
        )

    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)

        console.print()
        console.print(
            Panel(
                f"[bold red]❌ SEEDING FAILED[/bold red]\n\n[red]{e!s}[/red]",
                border_style="bold red",
            )
        )
        console.print()
        sys.exit(1)
    finally:
        if database is not None:
            await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
