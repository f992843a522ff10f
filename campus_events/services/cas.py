"""CAS identity bridge - exchanges a service ticket for a campus username."""
import logging

import requests
from cas import CASClient

from campus_events.errors import AuthenticationError

logger = logging.getLogger(__name__)


class CasBridge:

    def __init__(self, app=None):
        self.server_url = None
        self.version = 3
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.server_url = app.config['CAS_SERVER_URL']
        self.version = app.config.get('CAS_VERSION', 3)
        app.extensions['cas'] = self

    def client(self, service_url):
        return CASClient(version=self.version, service_url=service_url, server_url=self.server_url)

    def login_url(self, service_url):
        return self.client(service_url).get_login_url()

    def logout_url(self, redirect_url):
        return self.client(redirect_url).get_logout_url(redirect_url=redirect_url)

    def authenticate(self, ticket, service_url):
        """Validate ``ticket`` with the CAS server and return the username."""
        if not ticket:
            raise AuthenticationError('Missing CAS ticket')
        try:
            username, attributes, _pgtiou = self.client(service_url).verify_ticket(ticket)
        except requests.RequestException as e:
            logger.error("CAS server %s unreachable: %s", self.server_url, e)
            raise AuthenticationError('Could not reach the sign-in service') from e
        if not username:
            logger.warning("CAS rejected ticket %s", ticket)
            raise AuthenticationError('Sign-in ticket was rejected')
        logger.info("CAS authenticated %s", username)
        return username
