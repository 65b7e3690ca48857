"""Flask CLI commands for admin operations."""
import click
from flask import current_app


DEMO_OPTIONS = [
    ("Color", "color", ["Red", "Blue", "Green", "Black"]),
    ("Size", "text", ["S", "M", "L", "XL"]),
    ("Material", "text", ["Cotton", "Linen", "Silk"]),
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from options_manager.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    @click.option("--shop", default=None, help="Shop domain (defaults to DEMO_SHOP)")
    def seed_demo(shop):
        """Seed demo options for a shop (idempotent)."""
        from options_manager.models.option import Option
        from options_manager.services import option_service

        shop = shop or current_app.config["DEMO_SHOP"]
        if Option.query.filter_by(shop=shop).first():
            click.echo(f"{shop} already has options, skipping demo seed.")
            return

        for position, (name, option_type, values) in enumerate(DEMO_OPTIONS):
            option_service.create_option(
                shop,
                {"name": name, "type": option_type, "position": position, "values": values},
            )
        click.echo(f"Seeded {len(DEMO_OPTIONS)} demo options for {shop}.")

    @app.cli.command("list-options")
    @click.argument("shop")
    def list_options(shop):
        """Print a shop's options and their values."""
        from options_manager.services import option_service

        options = option_service.list_options(shop)
        if not options:
            click.echo(f"No options for {shop}.")
            return
        for option in options:
            values = ", ".join(
                v.value if v.is_active else f"({v.value})" for v in option.values
            )
            click.echo(f"{option.position:>3} {option.name} [{option.type}] {option.id}")
            click.echo(f"      {values}")

    @app.cli.command("delete-options")
    @click.argument("shop")
    @click.argument("option_ids", nargs=-1, required=True)
    def delete_options(shop, option_ids):
        """Delete options by id."""
        from options_manager.errors import PersistenceError
        from options_manager.services import option_service

        try:
            result = option_service.delete_options(list(option_ids), shop)
        except PersistenceError as e:
            raise click.ClickException(str(e))
        names = ", ".join(d["name"] for d in result["deleted_options"])
        click.echo(f"Deleted {result['count']} option(s): {names}")

    @app.cli.command("stats")
    def stats():
        """Show option counts per shop."""
        from options_manager.services.option_service import get_stats

        s = get_stats()
        total = sum(s.values())
        click.echo(f"Total options: {total}")
        for shop, count in sorted(s.items()):
            click.echo(f"  {shop}: {count}")
