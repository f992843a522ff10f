"""
Pytest configuration and fixtures.
"""
from datetime import datetime

import pytest

from campus_events import create_app
from campus_events.extensions import db as _db
from campus_events.models import Event, User


@pytest.fixture
def app():
    """App bound to a fresh in-memory database."""
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user record directly, bypassing provisioning."""
    def _make_user(username, user=True, admin=False, superuser=False, **fields):
        fields.setdefault('email', f'{username}@umd.edu')
        record = User(
            username=username,
            roles={'user': user, 'admin': admin, 'superuser': superuser},
            **fields
        )
        _db.session.add(record)
        _db.session.commit()
        return record
    return _make_user


@pytest.fixture
def make_event(app):
    def _make_event(**fields):
        values = {
            'name': 'Career Fair',
            'location': 'Stamp Student Union',
            'start_time': datetime(2026, 11, 5, 14, 0),
            'sponsors': ['ACM'],
            'rsvp_users': [],
            'major_restrictions': [],
            'tags': ['careers'],
        }
        values.update(fields)
        event = Event(**values)
        _db.session.add(event)
        _db.session.commit()
        return event
    return _make_event


@pytest.fixture
def login(client):
    """Put a CAS identity in the test client's session."""
    def _login(username):
        with client.session_transaction() as sess:
            sess['cas_username'] = username
    return _login


@pytest.fixture
def fake_cas(monkeypatch):
    """Replace the CAS client so no ticket validation leaves the process."""
    class FakeCASClient:
        valid_tickets = {'ST-alice': 'alice'}

        def __init__(self, version, service_url, server_url):
            self.version = version
            self.service_url = service_url
            self.server_url = server_url

        def get_login_url(self):
            return f'{self.server_url}/login?service={self.service_url}'

        def get_logout_url(self, redirect_url=None):
            return f'{self.server_url}/logout?service={redirect_url}'

        def verify_ticket(self, ticket):
            return self.valid_tickets.get(ticket), {}, None

    monkeypatch.setattr('campus_events.services.cas.CASClient', FakeCASClient)
    return FakeCASClient
