"""Role model - non-exclusive capability flags embedded in a User."""
from dataclasses import dataclass

ROLE_USER = 'User'
ROLE_ADMIN = 'Admin'
ROLE_SUPERUSER = 'Superuser'

VALID_ROLES = [ROLE_USER, ROLE_ADMIN, ROLE_SUPERUSER]


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'on', 'yes')
    return bool(value)


@dataclass(frozen=True)
class Roles:
    user: bool = True
    admin: bool = False
    superuser: bool = False

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        defaults = cls()
        return cls(
            user=_as_bool(data.get('user', defaults.user)),
            admin=_as_bool(data.get('admin', defaults.admin)),
            superuser=_as_bool(data.get('superuser', defaults.superuser)),
        )

    def to_dict(self):
        return {'user': self.user, 'admin': self.admin, 'superuser': self.superuser}

    def names(self):
        held = set()
        if self.user:
            held.add(ROLE_USER)
        if self.admin:
            held.add(ROLE_ADMIN)
        if self.superuser:
            held.add(ROLE_SUPERUSER)
        return held

    def grants(self, required):
        """Any-of match: holding one of ``required`` is enough."""
        return bool(self.names() & set(required))
