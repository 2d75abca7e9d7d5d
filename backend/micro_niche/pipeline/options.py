from dataclasses import dataclass, field
from typing import Dict, List

from micro_niche.schemas import InstantRequest

LANES: Dict[str, str] = {
    "surprise": "Surprise me",
    "online": "Online business",
    "local": "Local services",
    "ops": "Ops / admin workflows",
    "marketing": "Marketing / sales workflows",
    "education": "Education / training",
}

TIME_OPTIONS: Dict[str, str] = {
    "2-5": "2–5 hrs/week",
    "5-10": "5–10 hrs/week",
    "10+": "10+ hrs/week",
}

LEVEL_OPTIONS: Dict[str, str] = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
}

DEFAULT_LANE = "surprise"
DEFAULT_TIME = "5-10"
DEFAULT_LEVEL = "beginner"


@dataclass
class Preferences:
    lane_id: str
    lane: str
    time_budget: str
    skill_level: str
    notes: str = ""
    avoid_micro_niches: List[str] = field(default_factory=list)

    def prompt_payload(self) -> dict:
        return {
            "lane": self.lane,
            "timeBudget": self.time_budget,
            "skillLevel": self.skill_level,
            "notes": self.notes,
            "avoidMicroNiches": self.avoid_micro_niches,
        }

    def cache_payload(self) -> dict:
        payload = self.prompt_payload()
        payload["avoidMicroNiches"] = sorted(n.lower() for n in self.avoid_micro_niches)
        return payload


def resolve_preferences(request: InstantRequest) -> Preferences:
    """
    Map option ids to their labels. Unknown ids fall back to the defaults.
    """
    lane_id = request.lane_id if request.lane_id in LANES else DEFAULT_LANE
    time_id = request.time_id if request.time_id in TIME_OPTIONS else DEFAULT_TIME
    level_id = request.level_id if request.level_id in LEVEL_OPTIONS else DEFAULT_LEVEL

    avoid = []
    for niche in request.avoid_micro_niches:
        niche = niche.strip()
        if niche and niche not in avoid:
            avoid.append(niche)

    return Preferences(
        lane_id=lane_id,
        lane=LANES[lane_id],
        time_budget=TIME_OPTIONS[time_id],
        skill_level=LEVEL_OPTIONS[level_id],
        notes=request.notes.strip(),
        avoid_micro_niches=avoid,
    )
