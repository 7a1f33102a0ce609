import base64
import binascii
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from contact.config import DeliveryConfig
from contact.delivery import select_delivery
from contact.submission import ValidationError, validate_submission

# Lambda: le runtime attache déjà un handler au root logger
logging.getLogger().setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@dataclass
class ContactRequest:
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "ContactRequest":
        # REST API: httpMethod ; HTTP API v2: requestContext.http.method
        method = event.get("httpMethod") or (
            (event.get("requestContext") or {}).get("http") or {}
        ).get("method") or ""

        body = event.get("body")
        if isinstance(body, str) and event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError):
                body = None

        return cls(
            method=method.upper(),
            headers=event.get("headers") or {},
            body=body,
        )


@dataclass
class ContactResponse:
    status: int
    headers: Dict[str, str]
    body: Optional[Dict[str, Any]] = None

    def to_lambda(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status,
            "headers": self.headers,
            "body": "" if self.body is None else json.dumps(self.body, ensure_ascii=False),
        }


def _resp(status: int, payload: Optional[Dict[str, Any]] = None) -> ContactResponse:
    headers = dict(CORS_HEADERS)
    if payload is not None:
        headers["Content-Type"] = "application/json"
    return ContactResponse(status=status, headers=headers, body=payload)


def _parse_json_body(body: Any) -> Dict[str, Any]:
    # invocation directe: body peut déjà être un dict
    if isinstance(body, dict):
        return body
    if not body:
        return {}
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def handle(
    request: ContactRequest,
    config: Optional[DeliveryConfig] = None,
    mailer: Optional[Any] = None,
) -> ContactResponse:
    """
    Traite une soumission du formulaire de contact.

    config est lu depuis l'environnement s'il n'est pas fourni ; mailer remplace
    le client SendGrid (tests). Au plus un envoi par appel.
    """
    if request.method == "OPTIONS":
        return _resp(204)

    if request.method != "POST":
        return _resp(405, {"ok": False, "error": "Only POST allowed"})

    try:
        payload = _parse_json_body(request.body)

        try:
            submission = validate_submission(payload)
        except ValidationError as e:
            return _resp(400, {"ok": False, "error": str(e)})

        if config is None:
            config = DeliveryConfig.from_env()

        delivery = select_delivery(config, mailer=mailer)
        message = delivery.deliver(submission)
        return _resp(200, {"ok": True, "message": message})

    except Exception:
        logger.exception("Error in contact function")
        return _resp(500, {"ok": False, "error": "Server error"})


def handler(event, context):
    return handle(ContactRequest.from_event(event or {})).to_lambda()
