"""Shared fixtures: app, client, and a recording SMTP transport."""

import smtplib

import pytest

from app import create_app
from extensions import db
from utils.security import reset_rate_limits


class FakeSMTP:
    """Stands in for smtplib.SMTP and records every message sent."""

    sent = []
    fail_for = set()
    instances = 0

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.started_tls = False
        self.logged_in = None
        FakeSMTP.instances += 1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        if msg['To'] in FakeSMTP.fail_for:
            raise smtplib.SMTPRecipientsRefused({msg['To']: (550, b'rejected')})
        FakeSMTP.sent.append(msg)


@pytest.fixture
def sent_emails(monkeypatch):
    """List of messages handed to the SMTP transport, in send order."""
    FakeSMTP.sent = []
    FakeSMTP.fail_for = set()
    FakeSMTP.instances = 0
    monkeypatch.setattr(smtplib, 'SMTP', FakeSMTP)
    monkeypatch.setattr(smtplib, 'SMTP_SSL', FakeSMTP)
    return FakeSMTP.sent


@pytest.fixture
def smtp():
    return FakeSMTP


@pytest.fixture
def app(sent_emails):
    reset_rate_limits()
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.test_request_context():
        yield app


