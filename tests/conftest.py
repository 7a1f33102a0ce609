import pytest

from contact.config import DeliveryConfig


class FakeMailer:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        return {"status_code": 202}


class FailingMailer:
    def send(self, message):
        raise RuntimeError("sendgrid unavailable")


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def failing_mailer():
    return FailingMailer()


@pytest.fixture
def sendgrid_config():
    return DeliveryConfig(
        api_key="SG.test-key",
        recipient="team@example.com",
        sender="noreply@example.com",
    )


@pytest.fixture
def log_only_config():
    return DeliveryConfig(api_key=None, recipient="team@example.com", sender="team@example.com")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("SENDGRID_API_KEY", "CONTACT_TO", "SENDGRID_FROM", "CONTACT_SITE_NAME"):
        monkeypatch.delenv(var, raising=False)
