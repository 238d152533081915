"""Tests for the shared database connection cache."""

import threading
import time

import pytest
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import OperationalError

from utils.connection import ConnectionCache
from utils.errors import ConfigurationError, PersistenceError


def make_app(uri='sqlite:///:memory:'):
    app = Flask(__name__)
    app.config['SQLALCHEMY_DATABASE_URI'] = uri
    return app


def test_init_app_requires_database_uri():
    cache = ConnectionCache(SQLAlchemy())
    with pytest.raises(ConfigurationError, match='DATABASE_URL'):
        cache.init_app(make_app(uri=None))


def test_concurrent_first_callers_share_one_connection(monkeypatch):
    db = SQLAlchemy()
    app = make_app()
    cache = ConnectionCache(db, app)
    db.init_app(app)

    calls = []
    sentinel = object()

    def slow_connect():
        calls.append(1)
        time.sleep(0.05)
        return sentinel

    monkeypatch.setattr(cache, '_connect', slow_connect)

    results = []
    barrier = threading.Barrier(8)

    def worker():
        with app.app_context():
            barrier.wait()
            results.append(cache.get_connection())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(r is sentinel for r in results)


def test_failed_attempt_is_not_cached(monkeypatch):
    db = SQLAlchemy()
    app = make_app()
    cache = ConnectionCache(db, app)
    db.init_app(app)

    attempts = []

    def flaky_connect():
        attempts.append(1)
        if len(attempts) == 1:
            raise OperationalError('SELECT 1', {}, Exception('connection refused'))
        return 'engine'

    monkeypatch.setattr(cache, '_connect', flaky_connect)

    with app.app_context():
        with pytest.raises(PersistenceError):
            cache.get_connection()
        assert not cache.is_connected()

        assert cache.get_connection() == 'engine'
        assert cache.is_connected()
        assert cache.get_connection() == 'engine'

    assert len(attempts) == 2


def test_real_connection_verifies_with_round_trip():
    db = SQLAlchemy()
    app = make_app()
    cache = ConnectionCache(db, app)
    db.init_app(app)

    with app.app_context():
        engine = cache.get_connection()
        assert engine is db.engine
        assert cache.is_connected()


def test_state_is_per_app():
    db = SQLAlchemy()
    first, second = make_app(), make_app()
    cache = ConnectionCache(db)
    for app in (first, second):
        cache.init_app(app)
        db.init_app(app)

    with first.app_context():
        cache.get_connection()
        assert cache.is_connected()
    with second.app_context():
        assert not cache.is_connected()
