"""Medical cases module: shuffled answer presentation and grading."""

from flask import Blueprint

cases_bp = Blueprint('cases', __name__)
