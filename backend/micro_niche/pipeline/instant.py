import json
import logging

from micro_niche.inference.base import LLMClient
from micro_niche.inference.prompt import INSTANT_SYSTEM_PROMPT
from micro_niche.llm.parser import parse_instant
from micro_niche.pipeline.options import Preferences
from micro_niche.schemas import InstantProof

logger = logging.getLogger(__name__)


def build_instant_messages(prefs: Preferences) -> list:
    return [
        {"role": "system", "content": INSTANT_SYSTEM_PROMPT},
        {"role": "user", "content": json.dumps(prefs.prompt_payload(), ensure_ascii=False)},
    ]


def run_instant_proof(prefs: Preferences, client: LLMClient) -> InstantProof:
    """
    One model call → normalized Instant Proof.
    Raises ModelOutputError when the completion is not a JSON object.
    """
    logger.info("Generating instant proof (lane=%s)", prefs.lane_id)
    raw = client.generate(build_instant_messages(prefs))
    return parse_instant(raw)
