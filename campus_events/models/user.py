"""User model."""
from datetime import datetime
from campus_events.extensions import db, JSONType
from campus_events.models.roles import Roles


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False, index=True)  # CAS identity
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    email = db.Column(db.String(120), nullable=False)
    roles = db.Column(JSONType, nullable=False, default=lambda: Roles().to_dict())
    major = db.Column(db.String(100))
    class_standing = db.Column(db.String(50))  # Freshman, Sophomore, ...
    resume_ref = db.Column(db.String(500))  # Optional file pointer
    last_login = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def role_set(self):
        return Roles.from_dict(self.roles)

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip() or self.username

    def to_dict(self):
        return {
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'roles': self.role_set.to_dict(),
            'major': self.major,
            'class_standing': self.class_standing,
            'resume_ref': self.resume_ref,
            'last_login': self.last_login.isoformat() if self.last_login else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<User {self.username}>"
