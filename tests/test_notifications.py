"""Tests for account notification emails."""

from datetime import datetime

import pytest

from app.services import notifications
from app.services.notifications import EmailNotifier


class RecordingSMTP:
    """Stands in for smtplib.SMTP and keeps what was sent."""

    sent: list = []
    logins: list = []

    def __init__(self, host: str, port: int, timeout: float = 0) -> None:
        self.host = host
        self.port = port

    def __enter__(self) -> "RecordingSMTP":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def starttls(self) -> None:
        pass

    def login(self, user: str, password: str) -> None:
        RecordingSMTP.logins.append(user)

    def send_message(self, msg) -> None:
        RecordingSMTP.sent.append(msg)


@pytest.fixture
def smtp(monkeypatch: pytest.MonkeyPatch) -> type[RecordingSMTP]:
    RecordingSMTP.sent = []
    RecordingSMTP.logins = []
    monkeypatch.setattr(notifications.smtplib, "SMTP", RecordingSMTP)
    return RecordingSMTP


async def test_password_change_email_is_sent(smtp: type[RecordingSMTP]) -> None:
    """Test the message is addressed to the user and names the change time."""
    notifier = EmailNotifier(
        host="smtp.test", user="mailer", password="secret", from_addr="shop@example.com"
    )

    sent = await notifier.send_password_change_notification(
        "maria@example.com", datetime(2024, 5, 1, 18, 30)
    )

    assert sent is True
    assert smtp.logins == ["mailer"]
    msg = smtp.sent[0]
    assert msg["To"] == "maria@example.com"
    assert msg["From"] == "shop@example.com"
    assert "Password Has Been Changed" in msg["Subject"]
    assert "May 01, 2024" in msg.get_content()


async def test_password_change_email_without_host(smtp: type[RecordingSMTP]) -> None:
    """Test nothing is sent over SMTP when no relay is configured."""
    sent = await EmailNotifier().send_password_change_notification("maria@example.com")

    assert sent is True
    assert smtp.sent == []
