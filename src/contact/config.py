import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_RECIPIENT = "info@chargeflow.ca"
DEFAULT_SITE_NAME = "ChargeFlow"


@dataclass(frozen=True)
class DeliveryConfig:
    api_key: Optional[str]
    recipient: str
    sender: str
    site_name: str = DEFAULT_SITE_NAME

    @property
    def sendgrid_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DeliveryConfig":
        """
        CONTACT_TO -> SENDGRID_FROM -> DEFAULT_RECIPIENT pour le destinataire,
        SENDGRID_FROM -> destinataire pour l'expéditeur.
        Une variable vide compte comme absente.
        """
        if env is None:
            env = os.environ

        recipient = env.get("CONTACT_TO") or env.get("SENDGRID_FROM") or DEFAULT_RECIPIENT
        # l'expéditeur doit être vérifié côté SendGrid
        sender = env.get("SENDGRID_FROM") or recipient

        return cls(
            api_key=env.get("SENDGRID_API_KEY") or None,
            recipient=recipient,
            sender=sender,
            site_name=env.get("CONTACT_SITE_NAME") or DEFAULT_SITE_NAME,
        )
