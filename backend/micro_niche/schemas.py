from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional


class CamelModel(BaseModel):
    """Python field names, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


Confidence = Literal["High", "Medium", "Low"]
VerdictCall = Literal["Go", "Test", "Pass"]


# ---- Requests ----

class InstantRequest(CamelModel):
    lane: Optional[str] = None            # display label, informational only
    lane_id: str = "surprise"
    time_id: str = "5-10"
    level_id: str = "beginner"
    notes: str = Field(default="", max_length=2000)
    avoid_micro_niches: List[str] = Field(default_factory=list, max_length=30)


# ---- Instant Proof ----

class FirstService(CamelModel):
    name: str = ""
    outcome: str = ""


class InstantMeta(CamelModel):
    lane: str = ""
    confidence: Confidence = "Medium"
    confidence_why: str = ""
    confidence_drivers: List[str] = []
    confidence_raise: List[str] = []
    gates_passed: List[str] = []


class InstantProof(CamelModel):
    micro_niche: str = ""
    core_problem: str = ""
    first_service: FirstService = Field(default_factory=FirstService)
    buyer_places: List[str] = []
    one_action_today: str = ""
    meta: InstantMeta = Field(default_factory=InstantMeta)
    quick_start: List[str] = []


class DeepRequest(CamelModel):
    session_id: Optional[str] = None
    instant: Optional[InstantProof] = None
    notes: str = Field(default="", max_length=2000)


# ---- Deep Proof ----

class Verdict(CamelModel):
    call: VerdictCall = "Test"
    summary: str = ""


class Money(CamelModel):
    price_range: str = ""
    first_month_estimate: str = ""
    assumptions: List[str] = []


class TestPlan(CamelModel):
    days: int = 7
    steps: List[str] = []
    success_signal: str = ""


class FirstMove(CamelModel):
    channel: str = ""
    artifact: str = ""                    # copy-paste outreach message


class PassMeta(CamelModel):
    pass_expires_at: int
    seconds_remaining: int
    pass_hours: float


class DeepProof(CamelModel):
    verdict: Verdict = Field(default_factory=Verdict)
    why: List[str] = []
    money: Money = Field(default_factory=Money)
    test_plan: TestPlan = Field(default_factory=TestPlan)
    first_move: FirstMove = Field(default_factory=FirstMove)
    kill_switch: List[str] = []
    meta: Optional[PassMeta] = None


class CheckoutResponse(BaseModel):
    url: str
    id: str = ""
