"""
Discuss Blueprint - Multi-step project discussion wizard
Handles: Step navigation, answer accumulation and final submission
"""

from flask import Blueprint

discuss_bp = Blueprint('discuss', __name__, url_prefix='/discuss-project')

from . import routes
