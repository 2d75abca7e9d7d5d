import logging
from typing import Any, Dict, Optional, Tuple

import stripe

from micro_niche.errors import SessionLookupError, UpstreamError
from micro_niche.payments.models import CheckoutSessionRecord

logger = logging.getLogger(__name__)

LINE_ITEM_LIMIT = 10


def _field(obj: Any, name: str) -> Any:
    """Read a field from a Stripe object or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _to_unix_seconds(value: Any) -> Optional[int]:
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


def _price_ids(line_items: Any) -> Tuple[str, ...]:
    ids = []
    for item in _field(line_items, "data") or []:
        price = _field(item, "price")
        price_id = price if isinstance(price, str) else _field(price, "id")
        if price_id:
            ids.append(price_id)
    return tuple(ids)


class StripeGateway:
    """
    Thin wrapper over the Stripe Checkout API.
    One bounded HTTP timeout, no automatic network retries.
    """

    def __init__(self, api_key: str, timeout: float = 8.0):
        self.api_key = api_key
        self.timeout = timeout

        stripe.max_network_retries = 0
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    # --------------- session lookup --------------- #
    def retrieve_session(self, session_id: str) -> CheckoutSessionRecord:
        """
        Fetch a Checkout session and the price ids it was paid for.
        Any Stripe failure becomes SessionLookupError.
        """
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                api_key=self.api_key,
                expand=["line_items"],
            )
        except stripe.StripeError as e:
            raise SessionLookupError(f"session retrieve failed: {e}") from e

        line_items = _field(session, "line_items")
        if line_items is None:
            try:
                line_items = stripe.checkout.Session.list_line_items(
                    session_id,
                    api_key=self.api_key,
                    limit=LINE_ITEM_LIMIT,
                )
            except stripe.StripeError as e:
                raise SessionLookupError(f"line items lookup failed: {e}") from e

        return CheckoutSessionRecord(
            id=_field(session, "id") or session_id,
            payment_status=_field(session, "payment_status") or "unknown",
            created=_to_unix_seconds(_field(session, "created")),
            price_ids=_price_ids(line_items),
        )

    # --------------- checkout --------------- #
    def assert_price_exists(self, price_id: str) -> None:
        try:
            stripe.Price.retrieve(price_id, api_key=self.api_key)
        except stripe.StripeError as e:
            logger.error("Stripe price lookup failed for %s: %s", price_id, e)
            raise UpstreamError(
                "Stripe price lookup failed. Check STRIPE_PRICE_DEEP_PROOF + mode (test vs live)."
            ) from e

    def create_checkout_session(
        self,
        price_id: str,
        success_url: str,
        cancel_url: str,
    ) -> Dict[str, str]:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=[{"price": price_id, "quantity": 1}],
                success_url=success_url,
                cancel_url=cancel_url,
                allow_promotion_codes=True,
                metadata={"product": "deep_proof"},
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout session creation failed: %s", e)
            raise UpstreamError("Failed to create Stripe Checkout session.") from e

        url = (_field(session, "url") or "").strip()
        if not url:
            raise UpstreamError("Stripe Checkout session has no redirect URL.")

        return {"url": url, "id": _field(session, "id") or ""}
