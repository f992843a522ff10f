"""
Campus Events - Application Factory
"""
import logging
import os

import click
from flask import Flask, has_request_context, jsonify, request
from dotenv import load_dotenv

from campus_events.extensions import db, babel, cas
from campus_events.errors import CampusEventsError
from campus_events.pipeline import register_pipeline
from campus_events.routes import register_blueprints
from campus_events.utils.dates import register_template_helpers
from config.settings import config


def get_locale():
    """Determine the best locale for the user."""
    if not has_request_context():
        return None
    lang = request.cookies.get('babel_translation')
    if lang:
        return lang
    return request.accept_languages.best_match(['en', 'es'])


def create_app(config_name=None, config_overrides=None):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.config.update(config_overrides or {})

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    babel.init_app(app, locale_selector=get_locale)
    cas.init_app(app)

    @app.context_processor
    def inject_conf_var():
        return dict(get_locale=get_locale)

    register_template_helpers(app)
    register_pipeline(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_cli_commands(app)

    return app


def configure_logging(app):
    level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(level)
    logger = logging.getLogger('campus_events')
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        logger.addHandler(handler)


def register_error_handlers(app):

    @app.errorhandler(CampusEventsError)
    def handle_campus_events_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", type(error).__name__, error.message)
        else:
            app.logger.warning("%s on %s: %s", type(error).__name__, request.path, error.message)
        return jsonify(error.to_dict()), error.status_code


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("make-superuser")
    @click.argument("username")
    def make_superuser_command(username):
        """Grants the Superuser role to an existing user."""
        from campus_events.services.users import set_superuser
        try:
            user = set_superuser(username)
        except CampusEventsError as e:
            raise click.ClickException(e.message)
        click.echo(f"{user.username} is now a superuser.")
