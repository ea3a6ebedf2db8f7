"""
Payment service for Stripe hosted checkout
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import stripe

from contract_explainer.core.config import Settings
from contract_explainer.core.exceptions import PaymentServiceError

logger = logging.getLogger(__name__)


class PaymentService:
    """Creates Stripe Checkout sessions for the full contract analysis product"""

    def __init__(
        self,
        api_key: Optional[str],
        api_version: str,
        currency: str,
        unit_amount: int,
        product_name: str,
        product_description: str,
        success_url: str,
        cancel_url: str
    ):
        self.api_key = api_key
        self.api_version = api_version
        self.currency = currency
        self.unit_amount = unit_amount
        self.product_name = product_name
        self.product_description = product_description
        self.success_url = success_url
        self.cancel_url = cancel_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentService":
        return cls(
            api_key=settings.STRIPE_SECRET_KEY,
            api_version=settings.STRIPE_API_VERSION,
            currency=settings.CHECKOUT_CURRENCY,
            unit_amount=settings.CHECKOUT_UNIT_AMOUNT,
            product_name=settings.CHECKOUT_PRODUCT_NAME,
            product_description=settings.CHECKOUT_PRODUCT_DESCRIPTION,
            success_url=settings.CHECKOUT_SUCCESS_URL,
            cancel_url=settings.CHECKOUT_CANCEL_URL,
        )

    def is_configured(self) -> bool:
        """Check if payment service is properly configured"""
        return bool(self.api_key)

    def _session_params(self) -> Dict[str, Any]:
        return {
            "payment_method_types": ["card"],
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {
                            "name": self.product_name,
                            "description": self.product_description,
                        },
                        "unit_amount": self.unit_amount,
                    },
                    "quantity": 1,
                },
            ],
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
        }

    async def create_checkout_session(self) -> str:
        """
        Create a hosted checkout session.

        Returns:
            URL of the hosted checkout page

        Raises:
            PaymentServiceError: If Stripe is not configured or the call fails
        """
        if not self.is_configured():
            raise PaymentServiceError("Payment service not configured (missing STRIPE_SECRET_KEY)")

        try:
            session = await asyncio.to_thread(
                stripe.checkout.Session.create,
                api_key=self.api_key,
                stripe_version=self.api_version,
                **self._session_params()
            )
        except stripe.StripeError as e:
            logger.error(f"Error creating checkout session: {e}")
            raise PaymentServiceError(f"Stripe checkout session creation failed: {e}") from e

        logger.info(f"Created checkout session {session.id}")
        return session.url
