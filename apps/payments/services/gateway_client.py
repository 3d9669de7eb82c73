"""
HTTP client for the payment serverless functions.
"""
import json
import logging

import requests

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """A payment function call failed or returned an unusable body"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class EdgeFunctionClient:
    """Client for the create-payment-intent and paystack-initiate-payment functions"""

    CREATE_PAYMENT_INTENT = 'create-payment-intent'
    PAYSTACK_INITIATE_PAYMENT = 'paystack-initiate-payment'

    def __init__(self, config):
        self.config = config

    def invoke(self, function_name, payload, default_error):
        """
        POST ``payload`` to a function and return its decoded JSON body.

        Non-OK responses raise GatewayError with the body's ``error`` field,
        or ``default_error`` when the body has none.
        """
        if not self.config.is_configured():
            raise GatewayError("Payment gateway is not configured")

        url = f"{self.config.functions_url}/{function_name}"
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f"Bearer {self.config.anon_key}",
        }

        try:
            response = requests.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as e:
            logger.error(f"Payment function {function_name} unreachable: {e}")
            raise GatewayError(f"Network error: {e}") from e

        try:
            body = response.json()
        except (ValueError, json.JSONDecodeError):
            body = {}

        if not response.ok:
            message = body.get('error') if isinstance(body, dict) else None
            logger.warning(f"Payment function {function_name} returned {response.status_code}: {message}")
            raise GatewayError(message or default_error, status_code=response.status_code)

        return body if isinstance(body, dict) else {}

    def create_payment_intent(self, amount, user_id, transaction_id, promoted_poll_id=None, currency='USD'):
        """Returns (client_secret, payment_intent_id)"""
        body = self.invoke(
            self.CREATE_PAYMENT_INTENT,
            self._payload(amount, user_id, transaction_id, promoted_poll_id, currency),
            'Failed to create payment intent',
        )

        client_secret = body.get('clientSecret')
        if not client_secret:
            raise GatewayError('No client secret returned from payment intent creation')

        return client_secret, body.get('paymentIntentId')

    def initiate_paystack_payment(self, amount, user_id, transaction_id, promoted_poll_id=None, currency='NGN'):
        """Returns (authorization_url, reference)"""
        body = self.invoke(
            self.PAYSTACK_INITIATE_PAYMENT,
            self._payload(amount, user_id, transaction_id, promoted_poll_id, currency),
            'Failed to initialize Paystack payment',
        )

        authorization_url = body.get('authorizationUrl')
        if not authorization_url:
            raise GatewayError('No authorization URL returned from Paystack')

        return authorization_url, body.get('reference')

    @staticmethod
    def _payload(amount, user_id, transaction_id, promoted_poll_id, currency):
        return {
            'amount': float(amount),
            'userId': str(user_id),
            'transactionId': str(transaction_id),
            'promotedPollId': str(promoted_poll_id) if promoted_poll_id else None,
            'currency': currency,
        }
