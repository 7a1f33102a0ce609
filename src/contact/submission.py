import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

# permissif: un "@" et un point dans le domaine suffisent
EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

NAME_ERROR = "Please provide a valid name."
EMAIL_ERROR = "Please provide a valid email address."
MESSAGE_ERROR = "Please include a short message."


class ValidationError(Exception):
    """Input rejected; the message is safe to show to the caller."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    message: str
    phone: str = ""
    type: str = ""
    received_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.search(email) is not None


def _optional_text(value: Any) -> str:
    # null -> "" ; un nombre ou un objet n'est pas converti
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value.strip()


def validate_submission(payload: Dict[str, Any]) -> ContactSubmission:
    """
    Valide les champs du formulaire dans l'ordre name, email, message.
    La première erreur gagne (ValidationError). phone et type ne sont pas validés.
    """
    name = payload.get("name")
    if not isinstance(name, str) or len(name.strip()) < 2:
        raise ValidationError(NAME_ERROR)

    email = payload.get("email")
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        raise ValidationError(EMAIL_ERROR)

    message = payload.get("message")
    if not isinstance(message, str) or len(message.strip()) < 4:
        raise ValidationError(MESSAGE_ERROR)

    return ContactSubmission(
        name=name.strip(),
        email=email.strip(),
        message=message.strip(),
        phone=_optional_text(payload.get("phone")),
        type=_optional_text(payload.get("type")),
    )
