from micro_niche.payments.models import CheckoutSessionRecord, DenyReason, PassDecision
from micro_niche.payments.pass_verifier import PassVerifier, system_clock_ms, verify_pass

__all__ = [
    "CheckoutSessionRecord",
    "DenyReason",
    "PassDecision",
    "PassVerifier",
    "system_clock_ms",
    "verify_pass",
]
