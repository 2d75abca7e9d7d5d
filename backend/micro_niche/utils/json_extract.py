import json
import re

from micro_niche.errors import ModelOutputError


def strip_fences(text: str) -> str:
    text = re.sub(r"^```(?:json)?\s*", "", text.strip())
    return re.sub(r"\s*```$", "", text.strip())


def extract_json_object(text: str) -> dict:
    """
    Extract the JSON object from model output.

    Tries a direct json.loads first, then the first {...} block.
    Raises ModelOutputError (carrying a raw excerpt) when neither yields an object.
    """
    if not text or not isinstance(text, str):
        raise ModelOutputError("Model returned empty content", raw="")

    cleaned = strip_fences(text)

    try:
        data = json.loads(cleaned)
    except ValueError:
        data = None

    if data is None:
        match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if match:
            try:
                data = json.loads(match.group(0))
            except ValueError:
                data = None

    if not isinstance(data, dict):
        raise ModelOutputError("Model returned invalid JSON", raw=text)

    return data
