from functools import lru_cache
from typing import Callable

from fastapi import Depends

from micro_niche import config
from micro_niche.inference.base import LLMClient
from micro_niche.inference.config import get_deep_llm_client, get_llm_client
from micro_niche.payments.pass_verifier import PassVerifier
from micro_niche.payments.stripe_gateway import StripeGateway
from micro_niche.utils.cache import ExpiringCache

# Best-effort, per-process memo maps.
_instant_cache: ExpiringCache = ExpiringCache(max_size=config.INSTANT_CACHE_MAX_ENTRIES)
_checkout_session_memo: ExpiringCache = ExpiringCache()


@lru_cache
def get_stripe_gateway() -> StripeGateway:
    return StripeGateway(
        api_key=config.must_env("STRIPE_SECRET_KEY"),
        timeout=config.STRIPE_TIMEOUT_SECONDS,
    )


def get_pass_verifier(gateway: StripeGateway = Depends(get_stripe_gateway)) -> PassVerifier:
    return PassVerifier(
        gateway,
        expected_price_id=config.must_env("STRIPE_PRICE_DEEP_PROOF"),
        pass_hours=config.PASS_HOURS,
        memo=_checkout_session_memo,
        memo_ttl_seconds=config.PASS_LOOKUP_TTL_SECONDS,
    )


# Deferred providers: the deep route rejects a request without a session id
# before any secret is read.

def get_pass_verifier_factory() -> Callable[[], PassVerifier]:
    return lambda: get_pass_verifier(get_stripe_gateway())


def get_deep_llm_client_factory() -> Callable[[], LLMClient]:
    return get_deep_llm_client


def get_instant_cache() -> ExpiringCache:
    return _instant_cache


__all__ = [
    "get_stripe_gateway",
    "get_pass_verifier",
    "get_pass_verifier_factory",
    "get_instant_cache",
    "get_llm_client",
    "get_deep_llm_client",
    "get_deep_llm_client_factory",
]
