"""
Authorization gate.

``authorize`` turns a session and a list of required roles into one of
four decisions; the route layer acts on the decision.

    roles empty                       -> Allow(username), no user lookup
    no CAS identity in the session    -> DenyRedirect('/cas_login')
    identity without a User record    -> NeedsProvisioning(username)
    user holds any one required role  -> Allow(username, user)
    otherwise                         -> DenyForbidden(message, '/')
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from flask_babel import gettext as _

from campus_events.services.users import find_user

logger = logging.getLogger(__name__)

LOGIN_URL = '/cas_login'
HOME_URL = '/'
SESSION_IDENTITY_KEY = 'cas_username'


@dataclass(frozen=True)
class Allow:
    username: Optional[str]
    user: Any = None


@dataclass(frozen=True)
class DenyRedirect:
    target: str = LOGIN_URL


@dataclass(frozen=True)
class DenyForbidden:
    message: str
    target: str = HOME_URL


@dataclass(frozen=True)
class NeedsProvisioning:
    username: str


def authorize(session, required_roles, page=None):
    username = session.get(SESSION_IDENTITY_KEY)

    if not required_roles:
        return Allow(username)

    if not username:
        return DenyRedirect()

    user = find_user(username)
    if user is None:
        logger.info("No user record for %s, provisioning required", username)
        return NeedsProvisioning(username)

    if user.role_set.grants(required_roles):
        return Allow(user.username, user)

    logger.warning("User %s lacks roles %s for %s", username, list(required_roles), page)
    message = _('Sorry, you have insufficient user privileges to access the %(page)s page.',
                page=page or _('requested'))
    return DenyForbidden(message)
