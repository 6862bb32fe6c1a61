"""라우트 Blueprint 등록"""
from flask import Flask

from src.settings.constants import API_PREFIX


def register_blueprints(app: Flask):
    from .pages import pages_bp
    from .api_inventory import inventory_bp

    app.register_blueprint(pages_bp)
    app.register_blueprint(inventory_bp, url_prefix=API_PREFIX)
