"""
Ordered request pipeline.

Every request passes through ``STAGES`` in order before the view runs.
A stage receives the RequestState and may return a response to stop the
request there.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from flask import current_app, g, request, session

from campus_events.services.authorization import LOGIN_URL, SESSION_IDENTITY_KEY

NO_RETURN_PATHS = (LOGIN_URL, '/logout')


@dataclass
class RequestState:
    path: str
    method: str
    session: Any
    now: datetime
    username: Optional[str] = None


def expire_session(state):
    """Absolute lifetime with sliding renewal while the user is active."""
    if SESSION_IDENTITY_KEY not in state.session:
        return None

    duration = current_app.config['SESSION_DURATION']
    active_duration = current_app.config['SESSION_ACTIVE_DURATION']
    now_ts = state.now.timestamp()

    expires_at = state.session.get('expires_at')
    if expires_at is None:
        state.session['expires_at'] = now_ts + duration.total_seconds()
        return None

    if now_ts >= expires_at:
        current_app.logger.info("Session for %s expired", state.session.get(SESSION_IDENTITY_KEY))
        state.session.clear()
        return None

    if expires_at - now_ts < active_duration.total_seconds():
        state.session['expires_at'] = expires_at + active_duration.total_seconds()
    return None


def load_identity(state):
    state.username = state.session.get(SESSION_IDENTITY_KEY)
    g.username = state.username
    g.user = None
    return None


def remember_return_to(state):
    """After signing in, CAS login sends anonymous users back here."""
    if state.username or state.method != 'GET':
        return None
    if state.path in NO_RETURN_PATHS or state.path.startswith('/static') or '.' in state.path:
        return None
    state.session['return_to'] = state.path
    return None


STAGES = [expire_session, load_identity, remember_return_to]


def run_pipeline(stages=None):
    state = RequestState(path=request.path, method=request.method, session=session, now=datetime.now(timezone.utc))
    for stage in stages or STAGES:
        response = stage(state)
        if response is not None:
            return response
    return None


def register_pipeline(app, stages=None):
    app.before_request(lambda: run_pipeline(stages))
