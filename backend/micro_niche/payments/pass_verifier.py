"""
Access-pass verification.

A paid Checkout session buys a fixed window of access that starts at the
session's creation time. `verify_pass` is the only place that decides
whether a session id grants access right now; every endpoint goes through it.
"""

import logging
import time
from typing import Callable, Optional

from micro_niche.errors import SessionLookupError
from micro_niche.payments.models import CheckoutSessionRecord, DenyReason, PassDecision
from micro_niche.utils.cache import ExpiringCache

logger = logging.getLogger(__name__)

MS_PER_HOUR = 60 * 60 * 1000

SessionLookup = Callable[[str], CheckoutSessionRecord]
Clock = Callable[[], int]


def system_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def pass_expiry_ms(created_sec: int, pass_hours: float) -> int:
    return created_sec * 1000 + round(pass_hours * MS_PER_HOUR)


def decide_pass(
    record: CheckoutSessionRecord,
    *,
    expected_price_id: str,
    pass_hours: float,
    now_ms: int,
) -> PassDecision:
    if record.payment_status != "paid":
        return PassDecision.deny(
            pass_hours,
            DenyReason.NOT_PAID,
            payment_status=record.payment_status or "unknown",
        )

    if not expected_price_id or expected_price_id not in record.price_ids:
        return PassDecision.deny(pass_hours, DenyReason.WRONG_PRICE)

    if not record.created or record.created <= 0:
        return PassDecision.deny(pass_hours, DenyReason.MISSING_CREATED)

    expires_at = pass_expiry_ms(record.created, pass_hours)
    remaining_ms = expires_at - now_ms

    if remaining_ms <= 0:
        return PassDecision.deny(pass_hours, DenyReason.EXPIRED, expires_at_ms=expires_at)

    return PassDecision.grant(pass_hours, expires_at, remaining_ms // 1000)


def verify_pass(
    session_id: Optional[str],
    *,
    lookup: SessionLookup,
    expected_price_id: str,
    pass_hours: float = 24,
    clock: Clock = system_clock_ms,
) -> PassDecision:
    """
    Decide whether `session_id` may use the paid endpoints at `clock()`.

    Fails closed: an empty id, a failed lookup, an unpaid or foreign
    session and a missing creation timestamp all deny.
    """
    sid = (session_id or "").strip()
    if not sid:
        return PassDecision.deny(pass_hours, DenyReason.MISSING_SESSION_ID)

    try:
        record = lookup(sid)
    except SessionLookupError as e:
        logger.warning("Checkout session lookup failed: %s", e)
        return PassDecision.deny(pass_hours, DenyReason.LOOKUP_FAILED)

    return decide_pass(
        record,
        expected_price_id=expected_price_id,
        pass_hours=pass_hours,
        now_ms=clock(),
    )


class PassVerifier:
    """
    Binds `verify_pass` to a Stripe gateway and the configured product.

    Paid session records may be memoized for a few seconds to absorb
    client polling. Only the provider record is kept, never the decision,
    so expiry is always evaluated against the current clock.
    """

    def __init__(
        self,
        gateway,
        expected_price_id: str,
        pass_hours: float = 24,
        clock: Clock = system_clock_ms,
        memo: Optional[ExpiringCache] = None,
        memo_ttl_seconds: float = 30,
    ):
        if pass_hours <= 0:
            raise ValueError("pass_hours must be positive")

        self.gateway = gateway
        self.expected_price_id = expected_price_id
        self.pass_hours = pass_hours
        self.clock = clock
        self.memo = memo
        self.memo_ttl_seconds = memo_ttl_seconds

    def lookup(self, session_id: str) -> CheckoutSessionRecord:
        key = f"checkout_session:{session_id}"

        if self.memo is not None:
            cached = self.memo.get(key)
            if cached is not None:
                return cached

        record = self.gateway.retrieve_session(session_id)

        if self.memo is not None and record.payment_status == "paid":
            self.memo.set(key, record, self.memo_ttl_seconds)

        return record

    def verify(self, session_id: Optional[str]) -> PassDecision:
        decision = verify_pass(
            session_id,
            lookup=self.lookup,
            expected_price_id=self.expected_price_id,
            pass_hours=self.pass_hours,
            clock=self.clock,
        )

        if not decision.granted:
            logger.info("Access pass denied: %s", decision.reason.value)

        return decision
