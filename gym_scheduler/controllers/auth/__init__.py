from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from . import auth  # noqa: E402,F401
