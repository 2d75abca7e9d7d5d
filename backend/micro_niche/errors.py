from typing import Any, Dict, Optional


class MicroNicheError(Exception):
    """Base error rendered as a JSON `{"error": ...}` body."""

    status_code = 500

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.reason:
            payload["reason"] = self.reason
        return payload


class InvalidRequestError(MicroNicheError):
    status_code = 400


class PaymentRequiredError(MicroNicheError):
    status_code = 402

    def __init__(self, reason: str):
        super().__init__("Payment required", reason=reason)


class UpstreamError(MicroNicheError):
    """LLM or Stripe was unreachable or answered with a non-2xx status."""

    status_code = 500


class ModelOutputError(MicroNicheError):
    status_code = 500

    RAW_EXCERPT_LIMIT = 500

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = (raw or "")[: self.RAW_EXCERPT_LIMIT]

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["raw"] = self.raw
        return payload


class ConfigError(MicroNicheError):
    status_code = 500


class SessionLookupError(Exception):
    """Checkout session could not be fetched. Never leaves the payments package."""
