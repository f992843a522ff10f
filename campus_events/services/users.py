"""User repository and first-login provisioning."""
import logging
import re
from datetime import datetime

from flask import current_app

from campus_events.extensions import db
from campus_events.errors import DuplicateKeyError, NotFoundError, ValidationError
from campus_events.models import Roles, User
from campus_events.services.patching import PatchSpec, Field, TEXT, OBJECT
from campus_events.services.store import commit

logger = logging.getLogger(__name__)

UNDEFINED = 'Undefined'

USER_PATCH = PatchSpec('user', {
    'first_name': Field(TEXT, label='First name'),
    'last_name': Field(TEXT, label='Last name'),
    'email': Field(TEXT, required=True, label='Email'),
    'roles': Field(OBJECT, label='Roles', normalize=lambda value: Roles.from_dict(value).to_dict()),
    'major': Field(TEXT, label='Major'),
    'class_standing': Field(TEXT, label='Class standing'),
    'resume_ref': Field(TEXT),
}, immutable=('id', 'username', 'created_at', 'updated_at', 'last_login'))

# Fields a user may change on their own profile
PROFILE_FIELDS = ('first_name', 'last_name', 'email', 'major', 'class_standing')


def is_valid_email(email):
    return re.match(r'.+@.+\..+', email or '') is not None


def _validate(user):
    USER_PATCH.check_required(user)
    if not is_valid_email(user.email):
        raise ValidationError('A valid email address is required')


def find_user(username):
    if not username:
        return None
    return User.query.filter_by(username=username).first()


def get_user(username):
    user = find_user(username)
    if user is None:
        raise NotFoundError(f"User {username} not found")
    return user


def search_users(**filters):
    return User.query.filter_by(**filters).order_by(User.created_at.desc()).all()


def create_user(info):
    """Insert a new user. Raises DuplicateKeyError if the username exists."""
    username = info.get('username') or ''
    if not isinstance(username, str):
        raise ValidationError('Username/UID must be text')
    username = username.strip()
    if not username:
        raise ValidationError('Username/UID is required')

    user = User(username=username)
    USER_PATCH.apply(user, info)
    _validate(user)

    now = datetime.utcnow()
    user.created_at = now
    user.updated_at = now

    db.session.add(user)
    commit(f"create user {username}")
    logger.info("Created user %s", username)
    return user


def update_user(user, patch):
    """Merge ``patch`` into ``user``; ``username`` never changes."""
    try:
        USER_PATCH.apply(user, patch)
        _validate(user)
    except ValidationError:
        db.session.rollback()
        raise
    user.updated_at = datetime.utcnow()
    commit(f"update user {user.username}")
    logger.info("Updated user %s", user.username)
    return user


def provision(username, submitted_fields=None):
    """
    Create the User for a CAS identity seen for the first time.

    Missing major and class standing default to "Undefined" and new users
    only hold the User role. When no email is submitted it is derived as
    ``{username}@EMAIL_DOMAIN``; without a configured domain that is a
    ValidationError.

    A concurrent first login for the same identity makes the insert fail on
    the unique username; the existing record is then returned.
    """
    if not username:
        raise ValidationError('Username/UID is required')

    fields = {key: value for key, value in (submitted_fields or {}).items()
              if key not in ('username', 'roles')}
    if not fields.get('major'):
        fields['major'] = UNDEFINED
    if not fields.get('class_standing'):
        fields['class_standing'] = UNDEFINED
    if not fields.get('email'):
        domain = current_app.config.get('EMAIL_DOMAIN')
        if not domain:
            raise ValidationError('Email is required')
        fields['email'] = f"{username}@{domain}"
    fields['username'] = username
    fields['roles'] = Roles().to_dict()

    try:
        return create_user(fields)
    except DuplicateKeyError:
        user = find_user(username)
        if user is None:
            raise
        logger.info("User %s was provisioned concurrently, using the existing record", username)
        return user


def set_admin(username, is_admin):
    user = get_user(username)
    return update_user(user, {'roles': {'admin': bool(is_admin)}})


def set_superuser(username):
    user = get_user(username)
    return update_user(user, {'roles': {'superuser': True}})


def touch_last_login(user):
    user.last_login = datetime.utcnow()
    commit(f"record login for {user.username}")
