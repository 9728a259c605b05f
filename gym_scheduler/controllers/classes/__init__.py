from flask import Blueprint

classes_bp = Blueprint('classes', __name__)

from . import classes, sessions  # noqa: E402,F401
