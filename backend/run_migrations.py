#!/usr/bin/env python3
"""
Database migration runner for the BuildScape Supabase project.

Applies the SQL files in migrations/ in name order and records each one
(with a checksum) in a tracking table.

Usage:
    python run_migrations.py                    # Run pending migrations
    python run_migrations.py --status           # Show migration status
    python run_migrations.py --dry-run          # Show what would run

Configuration:
    Set SUPABASE_DB_URL in your .env file (Supabase Dashboard → Settings →
    Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class MigrationFile:
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "MigrationFile":
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(name=path.name, path=path, checksum=digest)


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationFile]:
    """All migration files, in the order they must be applied."""
    if not directory.exists():
        return []
    return [MigrationFile.load(p) for p in sorted(directory.glob("*.sql"))]


def connect(db_url: str):
    """Open a connection to the Supabase PostgreSQL database."""
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def applied_migrations(conn) -> dict[str, dict]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {
            name: {"checksum": checksum, "applied_at": applied_at}
            for name, checksum, applied_at in cur.fetchall()
        }


def pending_migrations(
    migrations: list[MigrationFile],
    applied: dict[str, dict],
) -> list[MigrationFile]:
    """Migrations not yet applied. Changed files are reported, not re-run."""
    pending = []
    for migration in migrations:
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name]["checksum"] != migration.checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {migration.name} has changed since it was applied"
            )
    return pending


def apply(conn, migration: MigrationFile) -> None:
    """Run one migration and record it, in a single transaction."""
    console.print(f"[blue]Running:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name} applied")


def show_status(applied: dict[str, dict], pending: list[MigrationFile]) -> None:
    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, info in applied.items():
        applied_at = info["applied_at"]
        table.add_row(
            name,
            "[green]Applied[/green]",
            applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else "",
            info["checksum"],
        )
    for migration in pending:
        table.add_row(migration.name, "[yellow]Pending[/yellow]", "", migration.checksum)

    if applied or pending:
        console.print(table)
    else:
        console.print("[dim]No migrations found.[/dim]")


def main():
    parser = argparse.ArgumentParser(description="Run database migrations for Supabase")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what migrations would run without executing them",
    )
    args = parser.parse_args()

    console.print("[bold]BuildScape Database Migrations[/bold]")

    conn = connect(get_settings().supabase_db_url)
    try:
        ensure_tracking_table(conn)
        applied = applied_migrations(conn)
        pending = pending_migrations(discover_migrations(), applied)

        if args.status:
            show_status(applied, pending)
            return
        if not pending:
            console.print("[green]All migrations are up to date![/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would run:[/cyan] {migration.name}")
            else:
                apply(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
