"""Error taxonomy shared by services and routes."""


class CampusEventsError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class AuthenticationError(CampusEventsError):
    """CAS rejected the ticket or could not be reached."""
    status_code = 401


class AuthorizationDenied(CampusEventsError):
    """
    Insufficient role, for callers that need an exception. Routes do not
    raise it: the gate reports denial as a DenyForbidden decision.
    """
    status_code = 403


class NotFoundError(CampusEventsError):
    status_code = 404


class PersistenceError(CampusEventsError):
    """The document store rejected a write."""
    status_code = 400


class ValidationError(PersistenceError):
    pass


class DuplicateKeyError(PersistenceError):
    pass
