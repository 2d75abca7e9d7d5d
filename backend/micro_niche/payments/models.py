from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DenyReason(str, Enum):
    MISSING_SESSION_ID = "missing_session_id"
    LOOKUP_FAILED = "session_lookup_failed"
    NOT_PAID = "not_paid"
    WRONG_PRICE = "wrong_price"
    EXPIRED = "expired"
    MISSING_CREATED = "missing_created_timestamp"


@dataclass(frozen=True)
class CheckoutSessionRecord:
    """What we read back from Stripe for one Checkout session."""

    id: str
    payment_status: str
    created: Optional[int]                   # unix seconds
    price_ids: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PassDecision:
    granted: bool
    pass_hours: float
    reason: Optional[DenyReason] = None
    expires_at_ms: Optional[int] = None
    seconds_remaining: int = 0
    payment_status: Optional[str] = None

    @classmethod
    def grant(cls, pass_hours: float, expires_at_ms: int, seconds_remaining: int) -> "PassDecision":
        return cls(
            granted=True,
            pass_hours=pass_hours,
            expires_at_ms=expires_at_ms,
            seconds_remaining=seconds_remaining,
        )

    @classmethod
    def deny(
        cls,
        pass_hours: float,
        reason: DenyReason,
        payment_status: Optional[str] = None,
        expires_at_ms: Optional[int] = None,
    ) -> "PassDecision":
        return cls(
            granted=False,
            pass_hours=pass_hours,
            reason=reason,
            payment_status=payment_status,
            expires_at_ms=expires_at_ms,
        )

    @property
    def expires_at_iso(self) -> Optional[str]:
        if self.expires_at_ms is None:
            return None
        dt = datetime.fromtimestamp(self.expires_at_ms / 1000, tz=timezone.utc)
        return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        hours = int(self.pass_hours) if float(self.pass_hours).is_integer() else self.pass_hours

        if self.granted:
            return {
                "paid": True,
                "passExpiresAt": self.expires_at_ms,
                "passExpiresAtIso": self.expires_at_iso,
                "secondsRemaining": self.seconds_remaining,
                "passHours": hours,
            }

        out: Dict[str, Any] = {
            "paid": False,
            "reason": self.reason.value if self.reason else None,
            "passHours": hours,
        }
        if self.payment_status is not None:
            out["payment_status"] = self.payment_status
        return out
