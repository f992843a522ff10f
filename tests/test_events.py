from datetime import datetime

import pytest

from campus_events.errors import NotFoundError, ValidationError
from campus_events.models import Event
from campus_events.services import events


def test_create_event_stamps_metadata(app):
    event = events.create_event({
        'name': 'Hackathon',
        'location': 'Iribe Center',
        'start_time': '11/05/2026 09:00 AM',
        'tags': 'coding, food',
        'rsvp_users': ['sneaky'],
    }, created_by='admin')

    assert event.id is not None
    assert event.start_time == datetime(2026, 11, 5, 9, 0)
    assert event.tags == ['coding', 'food']
    assert event.rsvp_users == []
    assert event.created_by == 'admin'
    assert event.created_at == event.updated_at


@pytest.mark.parametrize('missing', ['name', 'location', 'start_time'])
def test_create_event_requires_fields(app, missing):
    info = {'name': 'Hackathon', 'location': 'Iribe Center', 'start_time': '2026-11-05T09:00:00'}
    del info[missing]

    with pytest.raises(ValidationError):
        events.create_event(info)
    assert Event.query.count() == 0


def test_create_event_bad_start_time(app):
    with pytest.raises(ValidationError):
        events.create_event({'name': 'Hackathon', 'location': 'Iribe', 'start_time': 'tomorrow'})


def test_empty_patch_only_touches_updated(app, make_event):
    event = make_event()
    event.updated_at = datetime(2020, 1, 1)
    before = event.to_dict()

    events.update_event(event, {})

    after = event.to_dict()
    assert event.updated_at > datetime(2020, 1, 1)
    before.pop('updated_at')
    after.pop('updated_at')
    assert before == after


def test_list_fields_are_replaced_not_appended(app, make_event):
    event = make_event(tags=['x', 'y'], sponsors=['ACM', 'IEEE'])

    events.update_event(event, {'tags': ['a'], 'sponsors': []})

    assert event.tags == ['a']
    assert event.sponsors == []


def test_update_overwrites_scalars_and_keeps_the_rest(app, make_event):
    event = make_event(description='Old')

    events.update_event(event, {'location': 'McKeldin Mall', 'rsvp_limit': '50'})

    assert event.location == 'McKeldin Mall'
    assert event.rsvp_limit == 50
    assert event.description == 'Old'
    assert event.name == 'Career Fair'


def test_update_ignores_rsvp_list_and_creator(app, make_event):
    event = make_event(rsvp_users=['u1'], created_by='admin')

    events.update_event(event, {'rsvp_users': [], 'created_by': 'eve', 'colour': 'red'})

    assert event.rsvp_users == ['u1']
    assert event.created_by == 'admin'


def test_update_clearing_required_field_fails(app, make_event):
    event = make_event()

    with pytest.raises(ValidationError):
        events.update_event(event, {'tags': ['new'], 'name': '  '})

    assert event.name == 'Career Fair'
    assert event.tags == ['careers']


def test_rsvp_round_trip(app, make_event):
    event = make_event()

    events.add_rsvp(event, 'u1')
    events.add_rsvp(event, 'u2')
    assert event.rsvp_users == ['u1', 'u2']

    events.remove_rsvp(event, 'u1')
    assert 'u1' not in event.rsvp_users
    assert event.rsvp_users == ['u2']


def test_add_rsvp_keeps_duplicates_and_remove_drops_all(app, make_event):
    event = make_event()

    events.add_rsvp(event, 'u1')
    events.add_rsvp(event, 'u1')
    assert event.rsvp_users == ['u1', 'u1']

    events.remove_rsvp(event, 'u1')
    assert event.rsvp_users == []


def test_rsvp_limit_is_not_enforced(app, make_event):
    event = make_event(rsvp_limit=1, major_restrictions=['Physics'], class_restriction='Senior')

    events.add_rsvp(event, 'u1')
    events.add_rsvp(event, 'u2')

    assert event.rsvp_users == ['u1', 'u2']


def test_rsvp_stamps_updated(app, make_event):
    event = make_event()
    event.updated_at = datetime(2020, 1, 1)

    events.add_rsvp(event, 'u1')

    assert event.updated_at > datetime(2020, 1, 1)


def test_delete_event_is_hard_delete(app, make_event):
    event = make_event()
    event_id = event.id

    events.delete_event(event)

    with pytest.raises(NotFoundError):
        events.get_event(event_id)


def test_search_events(app, make_event):
    make_event(name='Spring Career Fair', start_time=datetime(2027, 3, 1), tags=['careers', 'spring'])
    make_event(name='Fall Career Fair', start_time=datetime(2026, 9, 1), tags=['careers'])
    make_event(name='Robotics Demo', start_time=datetime(2026, 10, 1), tags=['robots'])

    assert [e.name for e in events.search_events()] == ['Fall Career Fair', 'Robotics Demo', 'Spring Career Fair']
    assert [e.name for e in events.search_events(text='career')] == ['Fall Career Fair', 'Spring Career Fair']
    assert [e.name for e in events.search_events(tags=['careers', 'spring'])] == ['Spring Career Fair']
    assert events.all_tags() == ['careers', 'robots', 'spring']
