"""Routes package - Blueprint registration."""
from campus_events.routes.main import main_bp
from campus_events.routes.auth import auth_bp
from campus_events.routes.events import events_bp
from campus_events.routes.admin import admin_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(admin_bp)
