"""페이지 라우팅"""
from flask import Blueprint, render_template

from src.settings.constants import API_PREFIX

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def index():
    return render_template("index.html", api_prefix=API_PREFIX)
