"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from the main app.py to avoid circular imports
and enable better testing.
"""

from flask_sqlalchemy import SQLAlchemy
from utils.connection import ConnectionCache

# Initialize extensions without binding to app
db = SQLAlchemy()
connection_cache = ConnectionCache(db)

__all__ = ['db', 'connection_cache']
