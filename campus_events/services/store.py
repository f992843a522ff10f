"""Commit helper that maps storage failures onto the error taxonomy."""
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from campus_events.extensions import db
from campus_events.errors import DuplicateKeyError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)


def _is_unique_violation(error):
    orig = getattr(error, 'orig', None)
    if getattr(orig, 'pgcode', None) == '23505':
        return True
    return 'unique' in str(orig).lower()


def commit(action):
    """Commit the session; roll back and raise a PersistenceError on failure."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        if _is_unique_violation(e):
            logger.warning("Duplicate key while trying to %s", action)
            raise DuplicateKeyError(f"Could not {action}: duplicate key") from e
        logger.warning("Integrity error while trying to %s: %s", action, e.orig)
        raise ValidationError(f"Could not {action}: {e.orig}") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise PersistenceError(f"Could not {action}") from e
