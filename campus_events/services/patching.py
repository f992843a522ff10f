"""
Patch types for merge-updates.

Each entity declares a PatchSpec listing the fields a caller may patch and
how a patched value combines with the stored one:

    TEXT, INTEGER, DATETIME   overwrite
    LIST                      replace wholesale (never appended to)
    OBJECT                    merge recursively into the stored object

Keys that are unknown or immutable are skipped.
"""
import logging
from collections import namedtuple
from datetime import datetime

from campus_events.errors import ValidationError
from campus_events.utils.dates import parse_datetime

logger = logging.getLogger(__name__)

TEXT = 'text'
INTEGER = 'integer'
DATETIME = 'datetime'
LIST = 'list'
OBJECT = 'object'

Field = namedtuple('Field', ['kind', 'required', 'label', 'normalize'], defaults=(False, None, None))


def merge_object(base, patch):
    """Recursive merge of two dicts, returning a new dict."""
    merged = dict(base or {})
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_object(merged[key], value)
        else:
            merged[key] = value
    return merged


class PatchSpec:

    def __init__(self, entity, fields, immutable=()):
        self.entity = entity
        self.fields = fields
        self.immutable = set(immutable)

    def label(self, name):
        return self.fields[name].label or name

    def coerce(self, name, value):
        field = self.fields[name]
        if field.kind == TEXT:
            if value is None:
                return None
            if not isinstance(value, str):
                raise ValidationError(f"{self.label(name)} must be text")
            return value.strip()
        if field.kind == INTEGER:
            if value is None or value == '':
                return None
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ValidationError(f"{self.label(name)} must be a whole number")
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ValidationError(f"{self.label(name)} must be a whole number")
        if field.kind == DATETIME:
            if value is None or value == '':
                return None
            if not isinstance(value, (str, datetime)):
                raise ValidationError(f"{self.label(name)} must be a date and time")
            try:
                return parse_datetime(value)
            except ValueError:
                raise ValidationError(f"{self.label(name)} is not a valid date and time")
        if field.kind == LIST:
            if value is None:
                return []
            if isinstance(value, str):
                value = value.split(',')
            if not isinstance(value, (list, tuple)):
                raise ValidationError(f"{self.label(name)} must be a list")
            if any(not isinstance(item, str) for item in value):
                raise ValidationError(f"{self.label(name)} must be a list of text")
            return [item.strip() for item in value if item.strip()]
        if field.kind == OBJECT:
            if not isinstance(value, dict):
                raise ValidationError(f"{self.label(name)} must be an object")
            return value
        return value

    def apply(self, doc, patch):
        """Merge ``patch`` into ``doc`` in place and return ``doc``."""
        for key, value in patch.items():
            if key in self.immutable:
                logger.debug("Ignoring immutable %s field %r", self.entity, key)
                continue
            if key not in self.fields:
                logger.debug("Ignoring unknown %s field %r", self.entity, key)
                continue
            field = self.fields[key]
            value = self.coerce(key, value)
            if field.kind == OBJECT:
                value = merge_object(getattr(doc, key), value)
            if field.normalize is not None:
                value = field.normalize(value)
            setattr(doc, key, value)
        return doc

    def check_required(self, doc):
        for name, field in self.fields.items():
            if not field.required:
                continue
            value = getattr(doc, name)
            if value is None or (isinstance(value, str) and not value):
                raise ValidationError(f"{self.label(name)} is required")

    def from_form(self, form, only=None):
        """Build a patch from a request form (a werkzeug MultiDict)."""
        patch = {}
        for key in form.keys():
            if key not in self.fields or (only is not None and key not in only):
                continue
            if self.fields[key].kind == LIST:
                values = form.getlist(key)
                patch[key] = values if len(values) > 1 else values[0]
            else:
                patch[key] = form.get(key)
        return patch
