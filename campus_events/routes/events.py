"""Event routes - viewing, editing, and RSVPs."""
from flask import Blueprint, current_app, g, jsonify, render_template

from campus_events.routes.auth import public, user_required, admin_required
from campus_events.routes.forms import read_patch
from campus_events.services.events import (EVENT_PATCH, add_rsvp, create_event, delete_event,
                                           get_event, remove_rsvp, update_event)

events_bp = Blueprint('events', __name__)


# ========================================
# PUBLIC
# ========================================

@events_bp.route('/event/<int:event_id>')
@public
def show_event(event_id):
    event = get_event(event_id)
    return render_template('events/show.html', event=event, username=g.username)


# ========================================
# ADMIN - CREATE / EDIT / DELETE
# ========================================

@events_bp.route('/create_event')
@admin_required
def create_event_form():
    return render_template('events/form.html', event=None, duplicate=False, username=g.username)


@events_bp.route('/event', methods=['POST'])
@admin_required
def create():
    current_app.logger.info("Creating event for %s", g.username)
    event = create_event(read_patch(EVENT_PATCH), created_by=g.username)
    return jsonify(event.to_dict())


@events_bp.route('/event/<int:event_id>/edit', methods=['GET'])
@admin_required
def edit_form(event_id):
    event = get_event(event_id)
    return render_template('events/form.html', event=event, duplicate=False, username=g.username)


@events_bp.route('/event/<int:event_id>/duplicate')
@admin_required
def duplicate_form(event_id):
    """Event form prefilled from an existing event, submitted as a new one."""
    event = get_event(event_id)
    return render_template('events/form.html', event=event, duplicate=True, username=g.username)


@events_bp.route('/event/<int:event_id>/edit', methods=['POST'])
@admin_required
def edit(event_id):
    current_app.logger.info("Updating event %s", event_id)
    event = update_event(get_event(event_id), read_patch(EVENT_PATCH))
    return jsonify(event.to_dict())


@events_bp.route('/event/<int:event_id>/delete', methods=['POST'])
@admin_required
def delete(event_id):
    current_app.logger.info("Deleting event %s", event_id)
    delete_event(get_event(event_id))
    return jsonify({'deleted': event_id})


# ========================================
# RSVP
# ========================================

@events_bp.route('/event/<int:event_id>/rsvp', methods=['POST'])
@user_required
def rsvp(event_id):
    event = add_rsvp(get_event(event_id), g.username)
    return jsonify(event.to_dict())


@events_bp.route('/event/<int:event_id>/unrsvp', methods=['POST'])
@user_required
def unrsvp(event_id):
    event = remove_rsvp(get_event(event_id), g.username)
    return jsonify(event.to_dict())
