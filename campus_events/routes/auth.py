"""Authentication routes (CAS), profile, and permission decorators."""
from datetime import datetime, timezone
from functools import wraps

from flask import (Blueprint, current_app, flash, g, jsonify, redirect, render_template,
                   request, session, url_for)
from flask_babel import gettext as _

from campus_events.extensions import cas
from campus_events.errors import AuthenticationError
from campus_events.models.roles import ROLE_USER, ROLE_ADMIN, ROLE_SUPERUSER
from campus_events.routes.forms import read_patch
from campus_events.services.authorization import (Allow, DenyForbidden, DenyRedirect, NeedsProvisioning,
                                                  SESSION_IDENTITY_KEY, authorize)
from campus_events.services.users import (PROFILE_FIELDS, USER_PATCH, find_user, provision,
                                          touch_last_login, update_user)

auth_bp = Blueprint('auth', __name__)


# ==================== Permission decorators ====================

def permission_required(*roles):
    """
    Run the view only when the authorization gate allows it.

    With no roles the view is public and only ``g.username`` is set. A
    signed-in user without a record is provisioned from the submitted form
    and sent to the profile page.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            page = (request.endpoint or f.__name__).rsplit('.', 1)[-1].replace('_', ' ')
            decision = authorize(session, roles, page=page)

            if isinstance(decision, DenyRedirect):
                return redirect(decision.target)
            if isinstance(decision, DenyForbidden):
                flash(decision.message, 'danger')
                return redirect(decision.target)
            if isinstance(decision, NeedsProvisioning):
                submitted = USER_PATCH.from_form(request.form, only=PROFILE_FIELDS)
                provision(decision.username, submitted)
                flash(_('Welcome! Please complete your profile.'), 'info')
                return redirect(url_for('auth.profile'))

            if not isinstance(decision, Allow):
                raise TypeError(f"Unexpected authorization decision {decision!r}")
            g.username = decision.username
            g.user = decision.user
            return f(*args, **kwargs)
        return decorated_function
    return decorator


public = permission_required()
user_required = permission_required(ROLE_USER, ROLE_ADMIN, ROLE_SUPERUSER)
admin_required = permission_required(ROLE_ADMIN, ROLE_SUPERUSER)
superuser_required = permission_required(ROLE_SUPERUSER)


# ==================== Routes ====================

@auth_bp.route('/cas_login')
def cas_login():
    service_url = url_for('auth.cas_login', _external=True)
    ticket = request.args.get('ticket')
    if not ticket:
        return redirect(cas.login_url(service_url))

    try:
        username = cas.authenticate(ticket, service_url)
    except AuthenticationError as e:
        current_app.logger.warning("CAS login failed: %s", e.message)
        flash(_('Sign in failed. Please try again.'), 'danger')
        return redirect(url_for('main.index'))

    return_to = session.get('return_to') or url_for('main.index')
    session.clear()
    session[SESSION_IDENTITY_KEY] = username
    session['expires_at'] = (datetime.now(timezone.utc).timestamp()
                             + current_app.config['SESSION_DURATION'].total_seconds())

    user = find_user(username)
    if user is not None:
        touch_last_login(user)
    current_app.logger.info("%s signed in", username)
    return redirect(return_to)


@auth_bp.route('/logout')
def logout():
    username = session.get(SESSION_IDENTITY_KEY)
    session.clear()
    current_app.logger.info("%s signed out", username)
    return redirect(cas.logout_url(url_for('main.index', _external=True)))


@auth_bp.route('/profile', methods=['GET'])
@user_required
def profile():
    return render_template('auth/profile.html', user=g.user, username=g.username)


@auth_bp.route('/profile', methods=['POST'])
@user_required
def update_profile():
    patch = read_patch(USER_PATCH, only=PROFILE_FIELDS)
    user = update_user(g.user, patch)
    return jsonify(user.to_dict())
