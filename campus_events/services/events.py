"""Event repository: CRUD, search, merge-update and RSVP membership."""
import logging
from datetime import datetime

from campus_events.extensions import db
from campus_events.errors import NotFoundError, ValidationError
from campus_events.models import Event
from campus_events.services.patching import PatchSpec, Field, TEXT, INTEGER, DATETIME, LIST
from campus_events.services.store import commit

logger = logging.getLogger(__name__)

EVENT_PATCH = PatchSpec('event', {
    'name': Field(TEXT, required=True, label='Event name'),
    'description': Field(TEXT),
    'location': Field(TEXT, required=True, label='Event location'),
    'photo': Field(TEXT),
    'start_time': Field(DATETIME, required=True, label='Event start time'),
    'end_time': Field(DATETIME, label='Event end time'),
    'sponsors': Field(LIST, label='Sponsors'),
    'rsvp_limit': Field(INTEGER, label='RSVP limit'),
    'major_restrictions': Field(LIST, label='Major restrictions'),
    'class_restriction': Field(TEXT),
    'tags': Field(LIST, label='Tags'),
}, immutable=('id', 'rsvp_users', 'created_at', 'created_by', 'updated_at'))


def get_event(event_id):
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFoundError(f"Event {event_id} not found")
    return event


def search_events(text=None, tags=None):
    """Events sorted by start time, matching ``text`` in the name and all of ``tags``."""
    query = Event.query
    if text:
        query = query.filter(Event.name.ilike(f"%{text}%"))
    events = query.order_by(Event.start_time.asc()).all()
    if tags:
        wanted = set(tags)
        events = [event for event in events if wanted.issubset(event.tags or [])]
    return events


def all_tags():
    tags = []
    for event in Event.query.order_by(Event.start_time.asc()).all():
        for tag in event.tags or []:
            if tag not in tags:
                tags.append(tag)
    return tags


def create_event(info, created_by=None):
    event = Event(sponsors=[], major_restrictions=[], tags=[])
    EVENT_PATCH.apply(event, info)
    EVENT_PATCH.check_required(event)

    now = datetime.utcnow()
    event.rsvp_users = []
    event.created_by = created_by
    event.created_at = now
    event.updated_at = now

    db.session.add(event)
    commit(f"create event {event.name}")
    logger.info("Event %s (%s) created by %s", event.id, event.name, created_by)
    return event


def update_event(event, patch):
    """
    Merge ``patch`` into ``event``.

    List fields (tags, sponsors, major_restrictions) in the patch replace
    the stored list. ``updated_at`` is stamped even for an empty patch.
    """
    try:
        EVENT_PATCH.apply(event, patch)
        EVENT_PATCH.check_required(event)
    except ValidationError:
        db.session.rollback()
        raise
    event.updated_at = datetime.utcnow()
    commit(f"update event {event.id}")
    logger.info("Event %s updated", event.id)
    return event


def delete_event(event):
    event_id = event.id
    db.session.delete(event)
    commit(f"delete event {event_id}")
    logger.info("Event %s deleted", event_id)


def add_rsvp(event, username):
    """
    Append ``username`` to the RSVP list.

    Duplicates, ``rsvp_limit`` and the major/class restrictions are not
    checked. The row is re-read under a lock so concurrent RSVPs to the
    same event do not overwrite each other.
    """
    db.session.refresh(event, with_for_update=True)
    event.rsvp_users = list(event.rsvp_users or []) + [username]
    event.updated_at = datetime.utcnow()
    commit(f"RSVP {username} to event {event.id}")
    logger.info("%s RSVPed to event %s", username, event.id)
    return event


def remove_rsvp(event, username):
    """Remove every occurrence of ``username`` from the RSVP list."""
    db.session.refresh(event, with_for_update=True)
    event.rsvp_users = [user for user in event.rsvp_users or [] if user != username]
    event.updated_at = datetime.utcnow()
    commit(f"remove RSVP of {username} from event {event.id}")
    logger.info("%s removed RSVP from event %s", username, event.id)
    return event
