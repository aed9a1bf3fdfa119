from datetime import datetime

from flask import request
from flask_wtf import FlaskForm

from ..errors import InvalidInput


class JSONForm(FlaskForm):
    """FlaskForm fed from the JSON body; the SPA never renders our HTML."""

    class Meta:
        csrf = False


def validated(form_cls):
    form = form_cls()
    if not form.validate():
        raise InvalidInput("Validation failed", errors=form.errors)
    return form


def json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_datetime(value, field):
    if not value:
        raise InvalidInput(f"{field} is required", field=field)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput(f"{field} must be an ISO 8601 datetime", field=field) from None


def page_args(default_limit=10, max_limit=100):
    page = max(request.args.get("page", default=1, type=int) or 1, 1)
    limit = request.args.get("limit", default=default_limit, type=int) or default_limit
    return page, min(max(limit, 1), max_limit)
