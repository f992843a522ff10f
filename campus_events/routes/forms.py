"""Reading patches out of JSON bodies or submitted forms."""
from flask import request

from campus_events.errors import ValidationError


def read_patch(spec, only=None):
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        if only is not None:
            data = {key: value for key, value in data.items() if key in only}
        return data
    return spec.from_form(request.form, only=only)
