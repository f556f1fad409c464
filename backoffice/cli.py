"""Shop back-office CLI tool (shopctl)."""

from typing import List, Optional

import typer

app = typer.Typer(name="shopctl", help="Shop back-office CLI")
db_app = typer.Typer(help="Database management commands")
authz_app = typer.Typer(help="Authorization maintenance commands")
app.add_typer(db_app, name="db")
app.add_typer(authz_app, name="authz")


@db_app.command("create-tables")
def db_create_tables():
    """Create all tables that do not exist yet."""
    from backoffice.db.session import create_tables

    create_tables()
    typer.echo("✅ Tables created (or already exist)")


@db_app.command("seed")
def db_seed():
    """Seed permissions, roles, and the super-admin user, in that order."""
    from backoffice.db.session import SessionLocal
    from backoffice.db.seeds.seed_permissions import seed_permissions
    from backoffice.db.seeds.seed_roles import seed_roles
    from backoffice.db.seeds.seed_super_admin import seed_super_admin

    db = SessionLocal()
    try:
        seed_permissions(db)
        seed_roles(db)
        seed_super_admin(db)
    finally:
        db.close()
    typer.echo("✅ All seeds applied")


@authz_app.command("migrate-legacy-roles")
def migrate_legacy_roles(
    role: Optional[List[str]] = typer.Option(
        None, "--role", help="Role name to grant '*'; defaults to LEGACY_WILDCARD_ROLES",
    ),
):
    """Grant the wildcard permission to roles the old name-equality gate admitted."""
    from backoffice.core.config import settings
    from backoffice.db.session import SessionLocal
    from backoffice.db.legacy_roles import grant_legacy_wildcard

    db = SessionLocal()
    try:
        changed = grant_legacy_wildcard(db, role or settings.LEGACY_WILDCARD_ROLES)
    finally:
        db.close()
    if changed:
        typer.echo(f"✅ Granted '*' to: {', '.join(changed)}")
    else:
        typer.echo("ℹ️  No roles needed migration")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the FastAPI server."""
    import uvicorn
    uvicorn.run("backoffice.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
