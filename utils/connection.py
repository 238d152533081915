"""
Connection Module - Process-wide database connection cache

The first caller establishes and verifies the connection; every later caller
(including concurrent first callers) reuses it. A failed attempt is not
cached, so the next call retries.
"""

import threading
from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from .errors import ConfigurationError, PersistenceError


class _CacheState:
    def __init__(self):
        self.conn = None
        self.lock = threading.Lock()


class ConnectionCache:
    """Lazily-initialized shared connection bound to a Flask-SQLAlchemy instance"""

    extension_name = 'connection_cache'

    def __init__(self, db, app=None):
        self.db = db
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """
        Register the cache on the app

        Raises:
            ConfigurationError: If SQLALCHEMY_DATABASE_URI is not configured
        """
        if not app.config.get('SQLALCHEMY_DATABASE_URI'):
            raise ConfigurationError(
                'Please define the DATABASE_URL environment variable')
        app.extensions[self.extension_name] = _CacheState()

    def _state(self):
        try:
            return current_app.extensions[self.extension_name]
        except KeyError:
            raise ConfigurationError('ConnectionCache.init_app() was not called') from None

    def _connect(self):
        """Open the engine and verify it with a round-trip"""
        engine = self.db.engine
        with engine.connect() as conn:
            conn.execute(text('SELECT 1'))
        return engine

    def get_connection(self):
        """
        Return the cached connection, establishing it on first use

        Returns:
            Engine: The verified SQLAlchemy engine

        Raises:
            PersistenceError: If the connection attempt fails
        """
        state = self._state()
        if state.conn is not None:
            return state.conn

        with state.lock:
            # Another thread may have finished while we waited
            if state.conn is not None:
                return state.conn
            try:
                state.conn = self._connect()
            except SQLAlchemyError as e:
                state.conn = None
                current_app.logger.error(f"Database connection failed: {str(e)}")
                raise PersistenceError('Could not connect to the database') from e
            current_app.logger.info("✓ Database connection established")
            return state.conn

    def is_connected(self):
        return self._state().conn is not None


__all__ = ['ConnectionCache']
