from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from flask import Flask, jsonify

from services import db as db_service

BLUEPRINTS = [
    ("blueprints.workers.routes", "bp"),
    ("blueprints.events.routes", "bp"),
    ("blueprints.payments.routes", "bp"),
    ("blueprints.portal.routes", "bp"),
    ("blueprints.applications.routes", "bp"),
    ("blueprints.settings.routes", "bp"),
    ("blueprints.distance.routes", "bp"),
]

logger = logging.getLogger(__name__)


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(
        DATABASE=os.path.join(app.instance_path, "gigstaff.sqlite"),
        GOOGLE_MAPS_API_KEY=None,
        RESEND_API_KEY=None,
        MAIL_SENDER="GigStaffPro <onboarding@resend.dev>",
        LOG_LEVEL="INFO",
    )
    # GIGSTAFF_RESEND_API_KEY etc.
    app.config.from_prefixed_env("GIGSTAFF")

    if test_config:
        app.config.update(test_config)

    if not app.testing:
        logging.basicConfig(
            level=app.config["LOG_LEVEL"],
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    app.json.sort_keys = False
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    for import_path, attr in BLUEPRINTS:
        module = __import__(import_path, fromlist=[attr])
        blueprint = getattr(module, attr)
        app.register_blueprint(blueprint)

    @app.route("/healthz")
    def healthcheck() -> tuple[str, int]:
        return "OK", 200

    @app.errorhandler(db_service.DatabaseError)
    def database_error(exc: db_service.DatabaseError):
        logger.warning("Database error: %s", exc)
        return jsonify({"error": "database_error", "detail": str(exc)}), 400

    app.teardown_appcontext(db_service.close_db)

    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Initialize the SQLite schema and seed data."""
        db_service.initialize_schema()
        db_service.seed_database()
        click.echo("Database initialized and seeded.")

    @app.cli.command("import-payment-config")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    def import_payment_config_command(path: str) -> None:
        """Load pay rates, travel tiers and bonuses from a JSON or YAML file."""
        from adapters.config_loader import load_payment_tables
        from dao import payment_config_dao
        from domain.models import PaymentConfig
        from rules.pay import tier_problems

        tables = load_payment_tables(path)
        problems = tier_problems(PaymentConfig.from_rows({}, tables["travel_tiers"], {}))
        if problems:
            raise click.ClickException("; ".join(problems))
        if tables["pay_rates"]:
            payment_config_dao.save_pay_rates(tables["pay_rates"])
        if tables["travel_tiers"]:
            payment_config_dao.replace_travel_tiers(tables["travel_tiers"])
        if tables["bonuses"]:
            payment_config_dao.save_bonuses(tables["bonuses"])
        click.echo(
            f"Imported {len(tables['pay_rates'])} rates, "
            f"{len(tables['travel_tiers'])} tiers, {len(tables['bonuses'])} bonuses."
        )

    if app.config.get("AUTO_INIT_DB", True):
        with app.app_context():
            db_service.initialize_schema()
            db_service.seed_database()

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
