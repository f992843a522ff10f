"""Admin routes - user listing and role management."""
from flask import Blueprint, current_app, g, jsonify, render_template

from campus_events.models.roles import VALID_ROLES
from campus_events.routes.auth import admin_required, superuser_required
from campus_events.services.users import search_users, set_admin

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/users')
@admin_required
def users_list():
    """List all users for admin management."""
    users = search_users()
    return render_template('users/list.html', users=users, valid_roles=VALID_ROLES, username=g.username)


@admin_bp.route('/users/<username>/adminify', methods=['POST'])
@superuser_required
def adminify(username):
    """Grant the Admin role."""
    current_app.logger.info("%s upgrading %s to admin", g.username, username)
    return jsonify(set_admin(username, True).to_dict())


@admin_bp.route('/users/<username>/unadminify', methods=['POST'])
@superuser_required
def unadminify(username):
    """Revoke the Admin role."""
    current_app.logger.info("%s downgrading %s to regular user", g.username, username)
    return jsonify(set_admin(username, False).to_dict())
