import json
import logging

from micro_niche.inference.base import LLMClient
from micro_niche.inference.prompt import DEEP_SYSTEM_PROMPT
from micro_niche.llm.parser import parse_deep
from micro_niche.schemas import DeepProof, InstantProof

logger = logging.getLogger(__name__)


def build_deep_messages(instant: InstantProof, notes: str = "") -> list:
    payload = {
        "instant": instant.model_dump(by_alias=True, exclude={"quick_start"}),
        "notes": notes or "",
    }
    return [
        {"role": "system", "content": DEEP_SYSTEM_PROMPT},
        {"role": "user", "content": json.dumps(payload, ensure_ascii=False)},
    ]


def run_deep_proof(instant: InstantProof, notes: str, client: LLMClient) -> DeepProof:
    logger.info("Generating deep proof for %r", instant.micro_niche)
    raw = client.generate(build_deep_messages(instant, notes))
    return parse_deep(raw)
