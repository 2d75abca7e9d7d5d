from typing import List, Optional

from micro_niche.schemas import InstantProof


def _first_non_empty(items: Optional[List[str]]) -> str:
    for item in items or []:
        if isinstance(item, str) and item.strip():
            return item.strip()
    return ""


def build_quick_start(proof: InstantProof) -> List[str]:
    """
    Four "if you had 15 minutes" steps built from an Instant Proof.
    Deterministic: no model call.
    """
    niche = proof.micro_niche.strip()
    problem = proof.core_problem.strip()
    service = proof.first_service.name.strip()
    outcome = proof.first_service.outcome.strip()
    place = _first_non_empty(proof.buyer_places)

    steps = []

    # 1) Offer sentence
    if niche and service:
        suffix = f" ({outcome})" if outcome else ""
        steps.append(f'Write a 1-sentence offer: "I help {niche} by delivering {service}{suffix}."')
    elif niche:
        steps.append(f"Write a 1-sentence offer for {niche}: who you help + the outcome you deliver.")
    else:
        steps.append("Write a 1-sentence offer: who you help + what result you deliver.")

    # 2) Tiny target list
    if place:
        steps.append(f"Open {place} and list 10 potential buyers (copy/paste names + links).")
    else:
        steps.append("List 10 potential buyers (Google + a directory + one social platform).")

    # 3) Micro outreach message
    if service:
        problem_hint = f' ("{problem}")' if problem else ""
        steps.append(
            f"Draft a 2-sentence message: 1) mention the likely problem{problem_hint}, "
            f"2) offer {service} with a tiny, low-risk next step."
        )
    else:
        steps.append(
            "Draft a 2-sentence message: 1) name the likely problem, "
            "2) offer a low-risk next step (sample / audit / quick setup)."
        )

    # 4) Response signal
    steps.append(
        "Send it to 3 people. Success signal: at least 1 reply asking a question or requesting details."
    )

    return steps[:4]
