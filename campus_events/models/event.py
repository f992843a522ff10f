"""Event model."""
from datetime import datetime
from campus_events.extensions import db, JSONType


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    location = db.Column(db.String(200), nullable=False)
    photo = db.Column(db.String(500))
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime)

    sponsors = db.Column(JSONType, default=list)
    rsvp_users = db.Column(JSONType, default=list)  # Usernames, in RSVP order
    rsvp_limit = db.Column(db.Integer)

    # Declared eligibility, not enforced on RSVP
    major_restrictions = db.Column(JSONType, default=list)
    class_restriction = db.Column(db.String(50))

    tags = db.Column(JSONType, default=list)

    created_by = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'location': self.location,
            'photo': self.photo,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'sponsors': list(self.sponsors or []),
            'rsvp_users': list(self.rsvp_users or []),
            'rsvp_limit': self.rsvp_limit,
            'major_restrictions': list(self.major_restrictions or []),
            'class_restriction': self.class_restriction,
            'tags': list(self.tags or []),
            'created_by': self.created_by,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Event {self.id} {self.name}>"
