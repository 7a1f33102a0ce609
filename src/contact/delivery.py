import html
import json
import logging
from typing import Any, Dict, Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from contact.config import DeliveryConfig
from contact.submission import ContactSubmission

logger = logging.getLogger(__name__)

NOT_PROVIDED = "[not provided]"

SENT_MESSAGE = "Message sent."
LOG_ONLY_MESSAGE = "Received (no SendGrid configured). Check function logs."

MailMessage = Dict[str, str]


class SendGridMailer:
    """Envoie un message {to, from, subject, text, html} via l'API SendGrid."""

    def __init__(self, api_key: str, client: Optional[Any] = None):
        self.client = client or SendGridAPIClient(api_key)

    def send(self, message: MailMessage):
        mail = Mail(
            from_email=message["from"],
            to_emails=message["to"],
            subject=message["subject"],
            plain_text_content=message["text"],
            html_content=message["html"],
        )
        # python_http_client lève une HTTPError sur 4xx/5xx
        return self.client.send(mail)


def _or_not_provided(value: str) -> str:
    return value or NOT_PROVIDED


def build_text_body(sub: ContactSubmission) -> str:
    return "\n".join([
        f"Name: {sub.name}",
        f"Email: {sub.email}",
        f"Phone: {_or_not_provided(sub.phone)}",
        f"Interest: {_or_not_provided(sub.type)}",
        "",
        sub.message,
    ])


def build_html_body(sub: ContactSubmission, site_name: str) -> str:
    esc = html.escape
    message_html = esc(sub.message).replace("\n", "<br/>")
    return f"""
        <h3>New contact request - {esc(site_name)}</h3>
        <p><strong>Name:</strong> {esc(sub.name)}</p>
        <p><strong>Email:</strong> {esc(sub.email)}</p>
        <p><strong>Phone:</strong> {esc(_or_not_provided(sub.phone))}</p>
        <p><strong>Interest:</strong> {esc(_or_not_provided(sub.type))}</p>
        <p><strong>Message:</strong><br/>{message_html}</p>
        <hr/>
        <small>Received: {esc(sub.received_at)}</small>
    """


def build_message(sub: ContactSubmission, config: DeliveryConfig) -> MailMessage:
    return {
        "to": config.recipient,
        "from": config.sender,
        "subject": f"Website contact from {sub.name}",
        "text": build_text_body(sub),
        "html": build_html_body(sub, config.site_name),
    }


class SendGridDelivery:
    def __init__(self, config: DeliveryConfig, mailer: Optional[Any] = None):
        self.config = config
        self.mailer = mailer or SendGridMailer(config.api_key)

    def deliver(self, sub: ContactSubmission) -> str:
        self.mailer.send(build_message(sub, self.config))
        logger.info("[sendgrid] Contact sent: %s -> %s", sub.email, self.config.recipient)
        return SENT_MESSAGE


class LogOnlyDelivery:
    """Mode dev/local: pas de clé SendGrid, on journalise la soumission."""

    def deliver(self, sub: ContactSubmission) -> str:
        logger.info(
            "[contact] Received (SendGrid not configured): %s",
            json.dumps(sub.to_dict(), indent=2, ensure_ascii=False),
        )
        return LOG_ONLY_MESSAGE


def select_delivery(config: DeliveryConfig, mailer: Optional[Any] = None):
    if config.sendgrid_enabled:
        return SendGridDelivery(config, mailer=mailer)
    return LogOnlyDelivery()
