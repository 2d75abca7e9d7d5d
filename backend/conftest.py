import json

import pytest

from micro_niche.errors import SessionLookupError
from micro_niche.inference.base import LLMClient
from micro_niche.payments.models import CheckoutSessionRecord

T0 = 1_700_000_000                       # session created, unix seconds
T0_EXPIRES_MS = 1_700_086_400_000        # T0 + 24h, epoch ms
PRICE_ID = "price_deep_test"


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Dummy secrets for every test; nothing here may reach a real API.
    """
    monkeypatch.setenv("OPENAI_API_KEY", "dummy-test-key")
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_dummy")
    monkeypatch.setenv("STRIPE_PRICE_DEEP_PROOF", PRICE_ID)


class FakeLLMClient(LLMClient):
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate(self, messages):
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGateway:
    """Stands in for StripeGateway."""

    def __init__(self, records=None):
        self.records = dict(records or {})
        self.calls = []
        self.created = []
        self.create_error = None

    def retrieve_session(self, session_id):
        self.calls.append(session_id)
        record = self.records.get(session_id)
        if record is None:
            raise SessionLookupError(f"No such checkout.session: {session_id}")
        if isinstance(record, Exception):
            raise record
        return record

    def assert_price_exists(self, price_id):
        return None

    def create_checkout_session(self, price_id, success_url, cancel_url):
        if self.create_error is not None:
            raise self.create_error
        self.created.append(
            {"price_id": price_id, "success_url": success_url, "cancel_url": cancel_url}
        )
        return {"url": "https://checkout.stripe.com/c/pay/cs_test_new", "id": "cs_test_new"}


class FixedClock:
    def __init__(self, now_ms):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms


def paid_record(session_id="cs_test_paid", created=T0, price_ids=(PRICE_ID,), status="paid"):
    return CheckoutSessionRecord(
        id=session_id,
        payment_status=status,
        created=created,
        price_ids=tuple(price_ids),
    )


INSTANT_JSON = {
    "microNiche": "Independent physiotherapy clinics with 2-5 staff",
    "coreProblem": "No-shows and late cancellations eat 10-15% of weekly revenue",
    "firstService": {
        "name": "No-show reduction setup",
        "outcome": "Automated SMS reminders and a waitlist fill flow in 7 days",
    },
    "buyerPlaces": ["Local physio Facebook groups", "Google Maps listings", "LinkedIn clinic owners"],
    "oneActionToday": "List 10 clinics within 20 km and note their booking software",
    "meta": {
        "lane": "Local services",
        "confidence": "high",
        "confidenceWhy": "Clear buyer, direct revenue loss, existing tool spend.",
        "confidenceDrivers": ["Revenue loss is measurable"],
        "confidenceRaise": ["Three owners confirm no-show rate"],
        "gatesPassed": ["Specific buyer", "Money proximity"],
    },
}

DEEP_JSON = {
    "verdict": {"call": "go", "summary": "Worth a 7-day test."},
    "why": ["Owners complain about no-shows in forums", "Clinics already pay for booking tools"],
    "money": {
        "priceRange": "$300-$600 setup",
        "firstMonthEstimate": "$600-$1,200",
        "assumptions": ["2 clients in month one"],
    },
    "testPlan": {
        "days": 7,
        "steps": ["Day 1: list 20 clinics", "Day 2: send 10 messages"],
        "successSignal": "2 calls booked",
    },
    "firstMove": {
        "channel": "Email",
        "artifact": "Hi Dr. Lee, quick question about no-shows at your clinic...",
    },
    "killSwitch": ["Fewer than 2 replies after 20 messages"],
}


@pytest.fixture
def instant_raw():
    return json.dumps(INSTANT_JSON)


@pytest.fixture
def deep_raw():
    return json.dumps(DEEP_JSON)
