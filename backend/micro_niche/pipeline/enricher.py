from micro_niche.pipeline.options import Preferences
from micro_niche.pipeline.quickstart import build_quick_start
from micro_niche.schemas import InstantProof


def enrich_instant_proof(proof: InstantProof, prefs: Preferences) -> InstantProof:
    """
    Deterministically completes an Instant Proof without changing its intent.
    """
    meta = proof.meta

    # ---- Lane follows the user unless they asked to be surprised ----
    if not meta.lane or prefs.lane_id != "surprise":
        meta = meta.model_copy(update={"lane": prefs.lane})

    # ---- Confidence explanation fallback ----
    if not meta.confidence_why:
        meta = meta.model_copy(
            update={
                "confidence_why": "Rating is based on buyer clarity, money proximity, and evidence strength."
            }
        )

    # ---- A repeated niche can't be rated above Low ----
    avoided = {n.lower() for n in prefs.avoid_micro_niches}
    if proof.micro_niche.lower() in avoided:
        meta = meta.model_copy(
            update={
                "confidence": "Low",
                "confidence_raise": meta.confidence_raise + ["Generate again: this niche was already suggested."],
            }
        )

    proof = proof.model_copy(update={"meta": meta})
    return proof.model_copy(update={"quick_start": build_quick_start(proof)})
