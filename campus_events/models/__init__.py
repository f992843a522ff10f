"""Models package - Re-exports all models for convenient importing."""
from campus_events.extensions import db
from campus_events.models.roles import Roles
from campus_events.models.user import User
from campus_events.models.event import Event

__all__ = ['db', 'Roles', 'User', 'Event']
