# backend/app/clients/payment_gateway.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config import settings


class PaymentAuthorizationError(Exception):
    """The settlement provider refused or could not be reached."""


@dataclass(frozen=True)
class PaymentAuthorization:
    client_secret: str
    intent_id: Optional[str]
    amount_cents: int
    raw: dict[str, Any]


class PaymentGatewayClient:
    """
    Opaque payment authorization boundary (Stripe-compatible payment intents).

    Only authorizes an amount and hands back the client secret; nothing is
    reconciled against the payments ledger.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        currency: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.payments_api_key
        self.base = (base_url or settings.payments_base_url).rstrip("/")
        self.currency = currency or settings.payments_currency
        self.timeout = float(timeout if timeout is not None else settings.payments_timeout_seconds)
        self.transport = transport

    def enabled(self) -> bool:
        return bool(self.api_key)

    def authorize_payment(self, amount: float) -> PaymentAuthorization:
        if not self.api_key:
            raise PaymentAuthorizationError("payments_api_key not set")

        amount_cents = int(round(float(amount) * 100))
        if amount_cents <= 0:
            raise PaymentAuthorizationError("amount must be positive")

        url = f"{self.base}/payment_intents"
        form = {
            "amount": str(amount_cents),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(url, data=form, headers=headers)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PaymentAuthorizationError(f"payment authorization failed: {e}") from e

        secret = data.get("client_secret")
        if not secret:
            raise PaymentAuthorizationError("provider response missing client_secret")

        return PaymentAuthorization(
            client_secret=str(secret),
            intent_id=str(data["id"]) if data.get("id") else None,
            amount_cents=amount_cents,
            raw=data,
        )


def get_payment_gateway() -> PaymentGatewayClient:
    return PaymentGatewayClient()
