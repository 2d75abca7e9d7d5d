import json

from conftest import FakeLLMClient
from micro_niche.pipeline.deep import build_deep_messages, run_deep_proof
from micro_niche.pipeline.enricher import enrich_instant_proof
from micro_niche.pipeline.instant import run_instant_proof
from micro_niche.pipeline.options import resolve_preferences
from micro_niche.pipeline.quickstart import build_quick_start
from micro_niche.schemas import FirstService, InstantMeta, InstantProof, InstantRequest


def _prefs(**kwargs):
    return resolve_preferences(InstantRequest(**kwargs))


def test_resolve_preferences_maps_ids_to_labels():
    prefs = _prefs(lane_id="ops", time_id="10+", level_id="intermediate", notes="  spreadsheets  ")

    assert prefs.lane == "Ops / admin workflows"
    assert prefs.time_budget == "10+ hrs/week"
    assert prefs.skill_level == "Intermediate"
    assert prefs.notes == "spreadsheets"


def test_resolve_preferences_unknown_ids_fall_back_to_defaults():
    prefs = _prefs(lane_id="crypto", time_id="40", level_id="guru")

    assert prefs.lane_id == "surprise"
    assert prefs.lane == "Surprise me"
    assert prefs.time_budget == "5–10 hrs/week"
    assert prefs.skill_level == "Beginner"


def test_resolve_preferences_dedupes_avoid_list():
    prefs = _prefs(avoid_micro_niches=["Dog groomers", " Dog groomers ", "", "Tutors"])

    assert prefs.avoid_micro_niches == ["Dog groomers", "Tutors"]


def test_cache_payload_ignores_avoid_list_order():
    a = _prefs(avoid_micro_niches=["b", "A"]).cache_payload()
    b = _prefs(avoid_micro_niches=["a", "B"]).cache_payload()

    assert a == b


def test_run_instant_proof_sends_preferences(instant_raw):
    client = FakeLLMClient(instant_raw)
    prefs = _prefs(lane_id="local", avoid_micro_niches=["Dog groomers"])

    proof = run_instant_proof(prefs, client)

    system, user = client.calls[0]
    assert system["role"] == "system"
    assert "avoidMicroNiches" in system["content"]
    assert json.loads(user["content"])["avoidMicroNiches"] == ["Dog groomers"]
    assert proof.meta.confidence == "High"


def test_enrich_forces_chosen_lane_and_adds_quick_start():
    proof = InstantProof(micro_niche="Tutors", meta=InstantMeta(lane="Online business"))

    enriched = enrich_instant_proof(proof, _prefs(lane_id="education"))

    assert enriched.meta.lane == "Education / training"
    assert enriched.meta.confidence_why
    assert len(enriched.quick_start) == 4
    assert proof.quick_start == []                  # input left untouched


def test_enrich_keeps_model_lane_when_surprised():
    proof = InstantProof(micro_niche="Tutors", meta=InstantMeta(lane="Online business"))

    assert enrich_instant_proof(proof, _prefs()).meta.lane == "Online business"


def test_enrich_downgrades_repeated_niche():
    proof = InstantProof(micro_niche="Dog Groomers", meta=InstantMeta(confidence="High"))

    enriched = enrich_instant_proof(proof, _prefs(avoid_micro_niches=["dog groomers"]))

    assert enriched.meta.confidence == "Low"
    assert enriched.meta.confidence_raise[-1].startswith("Generate again")


def test_quick_start_uses_niche_service_and_place():
    proof = InstantProof(
        micro_niche="Yoga studios",
        core_problem="Empty off-peak classes",
        first_service=FirstService(name="Off-peak promo kit", outcome="+20% off-peak bookings"),
        buyer_places=["", "Mindbody directory"],
    )

    steps = build_quick_start(proof)

    assert steps[0] == 'Write a 1-sentence offer: "I help Yoga studios by delivering Off-peak promo kit (+20% off-peak bookings)."'
    assert steps[1].startswith("Open Mindbody directory")
    assert '("Empty off-peak classes")' in steps[2]
    assert steps[3].startswith("Send it to 3 people")


def test_quick_start_generic_when_empty():
    steps = build_quick_start(InstantProof())

    assert steps[0] == "Write a 1-sentence offer: who you help + what result you deliver."
    assert steps[1].startswith("List 10 potential buyers")
    assert "low-risk next step (sample" in steps[2]


def test_deep_messages_exclude_quick_start(deep_raw):
    instant = InstantProof(micro_niche="Yoga studios", quick_start=["a", "b"])

    messages = build_deep_messages(instant, "email only")
    payload = json.loads(messages[1]["content"])

    assert "quickStart" not in payload["instant"]
    assert payload["instant"]["microNiche"] == "Yoga studios"
    assert payload["notes"] == "email only"

    deep = run_deep_proof(instant, "", FakeLLMClient(deep_raw))
    assert deep.verdict.call == "Go"
