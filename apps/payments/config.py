"""
Payment gateway configuration.
"""
from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class PaymentGatewayConfig:
    """Connection details for the payment serverless functions"""

    project_url: str
    anon_key: str
    stripe_public_key: str = ''
    timeout: int = 10
    verify_ssl: object = True

    @property
    def functions_url(self):
        return f"{self.project_url.rstrip('/')}/functions/v1"

    def is_configured(self):
        return bool(self.project_url and self.anon_key)

    @classmethod
    def from_settings(cls):
        return cls(
            project_url=settings.PROJECT_URL,
            anon_key=settings.PROJECT_ANON_KEY,
            stripe_public_key=getattr(settings, 'STRIPE_PUBLIC_KEY', ''),
            timeout=getattr(settings, 'PAYMENT_GATEWAY_TIMEOUT', 10),
            verify_ssl=getattr(settings, 'PAYMENT_GATEWAY_VERIFY_SSL', True),
        )
