# controllers/__init__.py
"""Request and response helpers shared by the JSON blueprints."""

from flask import jsonify, request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import BooleanField


class ApiForm(FlaskForm):
    """Form bound to a JSON object. Only boolean fields accept JSON true/false."""

    class Meta:
        csrf = False

    # Payload keys holding a JSON object or array; set by json_form
    nested_keys = frozenset()

    def validate(self, extra_validators=None):
        misplaced = [
            field for field in self
            if field.name in self.nested_keys or (
                not isinstance(field, BooleanField)
                and field.raw_data and isinstance(field.raw_data[0], bool)
            )
        ]
        for field in misplaced:
            field.data = None
            field.raw_data = []

        valid = super().validate(extra_validators)

        for field in misplaced:
            field.errors.append('Must be a string or a number')
        return valid and not misplaced


def json_payload():
    """Request body as a dict; anything that is not a JSON object reads as empty."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_form(form_class, payload):
    """
    Bind an ApiForm to a JSON object.

    Null values count as absent. Numbers are read as text, true/false stay
    booleans, and objects or arrays are left out and reported by validate().
    """
    formdata = MultiDict()
    nested = set()
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            nested.add(key)
            continue
        formdata.add(key, value if isinstance(value, bool) else str(value))

    form = form_class(formdata=formdata)
    form.nested_keys = frozenset(nested)
    return form


def submitted_data(form, payload):
    """Validated values for the keys the payload contains; keys the form lacks pass through raw."""
    return {key: form[key].data if key in form and value is not None else value
            for key, value in payload.items()}


def validation_error(form):
    return jsonify({
        'success': False,
        'message': 'Validation failed',
        'errors': form.errors,
        'error_code': 'validation_error'
    }), 400
