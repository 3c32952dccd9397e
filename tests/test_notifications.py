from __future__ import annotations

import smtplib
from types import SimpleNamespace

import pytest

from services import notifications
from services.notifications import EmailNotifier, build_trainer_po_email, build_training_confirmation_email


def _config(**overrides):
    values = dict(
        EMAIL_ENABLED=True,
        EMAIL_HOST="smtp.test",
        EMAIL_PORT=2525,
        EMAIL_USER="office@example.com",
        EMAIL_PASSWORD="secret",
        EMAIL_FROM="",
        EMAIL_USE_TLS=True,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class _Sessions(list):
    """SMTP sessions opened during a test."""


@pytest.fixture
def smtp_sessions(monkeypatch):
    sessions = _Sessions()

    class FakeSMTP:
        fail_on_send = False

        def __init__(self, host, port, timeout=None):
            self.host = host
            self.port = port
            self.tls = False
            self.credentials = None
            self.messages = []
            sessions.append(self)

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def starttls(self):
            self.tls = True

        def login(self, user, password):
            self.credentials = (user, password)

        def send_message(self, message):
            if FakeSMTP.fail_on_send:
                raise smtplib.SMTPServerDisconnected("connection lost")
            self.messages.append(message)

    monkeypatch.setattr(notifications.smtplib, "SMTP", FakeSMTP)
    sessions.smtp_class = FakeSMTP
    return sessions


def test_disabled_email_is_not_sent(smtp_sessions):
    notifier = EmailNotifier(_config(EMAIL_ENABLED=False))

    assert notifier.send("asha@example.com", "Hello", "Body") is False
    assert smtp_sessions == []


def test_missing_recipient_is_skipped(smtp_sessions):
    assert EmailNotifier(_config()).send("", "Hello", "Body") is False
    assert EmailNotifier(_config()).send(None, "Hello", "Body") is False
    assert smtp_sessions == []


def test_send_with_attachment(smtp_sessions):
    notifier = EmailNotifier(_config())

    sent = notifier.send(
        "asha@example.com",
        "Purchase Order PO-1",
        "Please find attached",
        attachments=[("PO-1.pdf", b"%PDF-1.4 test", "application/pdf")],
    )

    assert sent is True
    session = smtp_sessions[0]
    assert (session.host, session.port) == ("smtp.test", 2525)
    assert session.tls is True
    assert session.credentials == ("office@example.com", "secret")

    message = session.messages[0]
    assert message["To"] == "asha@example.com"
    assert message["From"] == "office@example.com"
    assert message["Subject"] == "Purchase Order PO-1"
    attachment = next(message.iter_attachments())
    assert attachment.get_filename() == "PO-1.pdf"
    assert attachment.get_content() == b"%PDF-1.4 test"


def test_send_without_tls_or_login(smtp_sessions):
    notifier = EmailNotifier(_config(EMAIL_USE_TLS=False, EMAIL_USER="", EMAIL_FROM="noreply@example.com"))

    assert notifier.send("asha@example.com", "Hi", "Body") is True
    session = smtp_sessions[0]
    assert session.tls is False
    assert session.credentials is None
    assert session.messages[0]["From"] == "noreply@example.com"


def test_smtp_failure_returns_false(smtp_sessions):
    smtp_sessions.smtp_class.fail_on_send = True

    assert EmailNotifier(_config()).send("asha@example.com", "Hi", "Body") is False


def test_po_email_content():
    po = {
        "po_number": "PO-1700000000000",
        "start_date": "2026-03-02",
        "end_date": "2026-03-06",
        "days": 5,
        "daily_rate": 5000.0,
        "total_amount": 25000.0,
        "notes": None,
    }
    subject, body = build_trainer_po_email({"name": "Asha Rao"}, po)

    assert subject == "Purchase Order PO-1700000000000"
    assert body.startswith("Dear Asha Rao,")
    assert "- Total Amount: ₹25,000.00" in body
    assert "Notes: N/A" in body


def test_training_confirmation_content():
    subject, body = build_training_confirmation_email({
        "client_name": "Acme Corp",
        "training_type": "Corporate",
        "start_date": "2026-03-20",
        "end_date": "2026-03-22",
        "trainer": None,
    })

    assert subject == "New Training Registration Confirmed"
    assert "Trainer: TBD" in body
