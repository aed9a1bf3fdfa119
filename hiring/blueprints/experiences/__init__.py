from flask import Blueprint

bp = Blueprint("experiences", __name__)

from . import routes  # noqa: E402,F401
