"""Flask extension instances, bound to the app in ``create_app``."""
from flask_sqlalchemy import SQLAlchemy
from flask_babel import Babel
from sqlalchemy.dialects.postgresql import JSONB

from campus_events.services.cas import CasBridge

db = SQLAlchemy()
babel = Babel()
cas = CasBridge()

# JSONB on PostgreSQL, plain JSON on anything else (SQLite in tests)
JSONType = db.JSON().with_variant(JSONB(), 'postgresql')
