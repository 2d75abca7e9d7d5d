import logging
from typing import Callable
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from micro_niche import config
from micro_niche.api.dependencies import (
    get_deep_llm_client_factory,
    get_instant_cache,
    get_llm_client,
    get_pass_verifier,
    get_pass_verifier_factory,
    get_stripe_gateway,
)
from micro_niche.errors import InvalidRequestError, PaymentRequiredError
from micro_niche.inference.base import LLMClient
from micro_niche.payments.models import DenyReason
from micro_niche.payments.pass_verifier import PassVerifier
from micro_niche.payments.stripe_gateway import StripeGateway
from micro_niche.pipeline.deep import run_deep_proof
from micro_niche.pipeline.enricher import enrich_instant_proof
from micro_niche.pipeline.instant import run_instant_proof
from micro_niche.pipeline.options import resolve_preferences
from micro_niche.schemas import (
    CheckoutResponse,
    DeepProof,
    DeepRequest,
    InstantProof,
    InstantRequest,
    PassMeta,
)
from micro_niche.utils.cache import ExpiringCache
from micro_niche.utils.hashing import stable_key

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def root():
    return {"message": "Micro-Niche Engine API"}


# ============================
# GENERATION
# ============================

@router.post("/api/generate/instant", response_model=InstantProof)
def generate_instant(
    request: InstantRequest,
    client: LLMClient = Depends(get_llm_client),
    cache: ExpiringCache = Depends(get_instant_cache),
):
    prefs = resolve_preferences(request)
    key = stable_key("instant", prefs.cache_payload())

    cached = cache.get(key)
    if cached is not None:
        logger.info("Instant proof served from cache")
        return cached

    proof = run_instant_proof(prefs, client)
    proof = enrich_instant_proof(proof, prefs)

    cache.set(key, proof, config.INSTANT_CACHE_TTL_SECONDS)
    return proof


@router.post("/api/generate/deep", response_model=DeepProof)
def generate_deep(
    request: DeepRequest,
    verifier_factory: Callable[[], PassVerifier] = Depends(get_pass_verifier_factory),
    client_factory: Callable[[], LLMClient] = Depends(get_deep_llm_client_factory),
):
    # Checked before any upstream call or secret lookup.
    session_id = (request.session_id or "").strip()
    if not session_id:
        raise PaymentRequiredError(DenyReason.MISSING_SESSION_ID.value)

    if request.instant is None:
        raise InvalidRequestError("Missing instant")

    decision = verifier_factory().verify(session_id)
    if not decision.granted:
        raise PaymentRequiredError(decision.reason.value)

    deep = run_deep_proof(request.instant, request.notes, client_factory())

    return deep.model_copy(
        update={
            "meta": PassMeta(
                pass_expires_at=decision.expires_at_ms,
                seconds_remaining=decision.seconds_remaining,
                pass_hours=decision.pass_hours,
            )
        }
    )


# ============================
# STRIPE
# ============================

@router.post("/api/stripe/create-checkout-session", response_model=CheckoutResponse)
def create_checkout_session(gateway: StripeGateway = Depends(get_stripe_gateway)):
    # Product is fixed server-side; any request body is ignored.
    price_id = config.must_env("STRIPE_PRICE_DEEP_PROOF")

    gateway.assert_price_exists(price_id)

    session = gateway.create_checkout_session(
        price_id=price_id,
        success_url=f"{config.APP_URL}/unlock?paid=1&session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{config.APP_URL}/?canceled=1",
    )
    logger.info("Created checkout session %s", session["id"])
    return session


@router.get("/api/stripe/verify-session")
def verify_session(
    session_id: str = Query(default=""),
    verifier: PassVerifier = Depends(get_pass_verifier),
):
    return verifier.verify(session_id).to_dict()


@router.get("/unlock")
def unlock(session_id: str = Query(default=""), paid: str = Query(default="")):
    """
    Landing target for Stripe's success redirect. Forwards to the app entry point.
    """
    session_id = session_id.strip()
    if not session_id:
        return RedirectResponse(f"{config.APP_URL}/?unlock=missing_session")

    query = urlencode({"paid": "1" if paid.strip() == "1" else "0", "session_id": session_id})
    return RedirectResponse(f"{config.APP_URL}/?{query}")
