from flask import Blueprint

admin_bp = Blueprint("admin", __name__)

from options_manager.blueprints.admin import views  # noqa: F401, E402
