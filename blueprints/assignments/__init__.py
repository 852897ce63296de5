from flask import Blueprint

# url_prefix is given in app.register_blueprint
bp = Blueprint("assignments", __name__)

from . import routes  # noqa: E402,F401
