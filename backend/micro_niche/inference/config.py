from micro_niche import config
from .chat_completions_client import ChatCompletionsClient


def get_llm_client():
    return ChatCompletionsClient(
        base_url=config.LLM_BASE_URL,
        model=config.LLM_MODEL,
        api_key=config.must_env("OPENAI_API_KEY"),
        temperature=0.7,
        timeout=config.LLM_TIMEOUT_SECONDS,
    )


def get_deep_llm_client():
    return ChatCompletionsClient(
        base_url=config.LLM_BASE_URL,
        model=config.LLM_MODEL_DEEP,
        api_key=config.must_env("OPENAI_API_KEY"),
        temperature=0.4,
        timeout=config.LLM_TIMEOUT_SECONDS,
    )
