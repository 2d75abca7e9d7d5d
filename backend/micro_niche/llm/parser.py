from typing import Any, Dict, List

from micro_niche.schemas import (
    DeepProof,
    FirstMove,
    FirstService,
    InstantMeta,
    InstantProof,
    Money,
    TestPlan,
    Verdict,
)
from micro_niche.utils.json_extract import extract_json_object


# ============================================================
# COERCION HELPERS (LLM TRUST BOUNDARY)
# ============================================================

def _text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value.strip()
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value).strip()


def _text_list(value: Any, limit: int) -> List[str]:
    """
    Accepts ["a", "b"], "a" or [{"text": "a"}] and returns a clean list of strings.
    """
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []

    items = []
    for item in value:
        if isinstance(item, dict):
            item = next((v for v in item.values() if isinstance(v, str)), "")
        text = _text(item)
        if text:
            items.append(text)
    return items[:limit]


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _confidence(value: Any) -> str:
    return {
        "high": "High",
        "medium": "Medium",
        "med": "Medium",
        "low": "Low",
    }.get(_text(value).lower(), "Medium")


def _verdict_call(value: Any) -> str:
    return {
        "go": "Go",
        "yes": "Go",
        "test": "Test",
        "test first": "Test",
        "maybe": "Test",
        "pass": "Pass",
        "no": "Pass",
        "no-go": "Pass",
        "no go": "Pass",
        "kill": "Pass",
    }.get(_text(value).lower(), "Test")


def _days(value: Any, default: int = 7, low: int = 7, high: int = 14) -> int:
    try:
        days = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(low, min(high, days))


# ============================================================
# INSTANT PROOF
# ============================================================

def parse_instant(raw: str) -> InstantProof:
    data = extract_json_object(raw)

    service = data.get("firstService")
    if isinstance(service, str):
        first_service = FirstService(name=_text(service))
    else:
        service = _dict(service)
        first_service = FirstService(
            name=_text(service.get("name")),
            outcome=_text(service.get("outcome")),
        )

    meta = _dict(data.get("meta"))

    return InstantProof(
        micro_niche=_text(data.get("microNiche") or data.get("micro_niche"), "Unknown niche"),
        core_problem=_text(data.get("coreProblem")),
        first_service=first_service,
        buyer_places=_text_list(data.get("buyerPlaces"), limit=6),
        one_action_today=_text(data.get("oneActionToday")),
        meta=InstantMeta(
            lane=_text(meta.get("lane") or data.get("lane")),
            confidence=_confidence(meta.get("confidence")),
            confidence_why=_text(meta.get("confidenceWhy")),
            confidence_drivers=_text_list(meta.get("confidenceDrivers"), limit=5),
            confidence_raise=_text_list(meta.get("confidenceRaise"), limit=5),
            gates_passed=_text_list(meta.get("gatesPassed"), limit=6),
        ),
    )


# ============================================================
# DEEP PROOF
# ============================================================

def _risks_as_kill_switch(value: Any) -> List[str]:
    # older shape: [{"risk": ..., "mitigation": ...}]
    out = []
    if isinstance(value, list):
        for r in value:
            risk = _text(_dict(r).get("risk"))
            if risk:
                out.append(f"Stop if: {risk}")
    return out


def parse_deep(raw: str) -> DeepProof:
    data = extract_json_object(raw)

    verdict = data.get("verdict")
    if isinstance(verdict, str):
        verdict_model = Verdict(call=_verdict_call(verdict))
    else:
        verdict = _dict(verdict)
        verdict_model = Verdict(
            call=_verdict_call(verdict.get("call")),
            summary=_text(verdict.get("summary")),
        )

    why = _text_list(data.get("why"), limit=6) or _text_list(data.get("whyExists"), limit=6)

    money = _dict(data.get("money"))
    test_plan = _dict(data.get("testPlan"))
    steps = _text_list(test_plan.get("steps"), limit=10) or _text_list(
        data.get("executionPath"), limit=10
    )

    first_move = data.get("firstMove")
    if isinstance(first_move, str):
        first_move_model = FirstMove(artifact=_text(first_move))
    else:
        first_move = _dict(first_move)
        first_move_model = FirstMove(
            channel=_text(first_move.get("channel")),
            artifact=_text(first_move.get("artifact") or first_move.get("message")),
        )

    kill_switch = _text_list(data.get("killSwitch"), limit=6) or _risks_as_kill_switch(
        data.get("riskCheck")
    )[:6]

    return DeepProof(
        verdict=verdict_model,
        why=why,
        money=Money(
            price_range=_text(money.get("priceRange")),
            first_month_estimate=_text(money.get("firstMonthEstimate")),
            assumptions=_text_list(money.get("assumptions"), limit=6),
        ),
        test_plan=TestPlan(
            days=_days(test_plan.get("days")),
            steps=steps,
            success_signal=_text(test_plan.get("successSignal")),
        ),
        first_move=first_move_model,
        kill_switch=kill_switch,
    )
