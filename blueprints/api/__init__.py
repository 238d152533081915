"""
API Blueprint - JSON endpoints
Handles: Project discussion and contact submissions, chatbot relay, content feeds
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import routes
