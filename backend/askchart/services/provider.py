import logging
import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from ..core.config import settings
from ..core.errors import GenerationError

logger = logging.getLogger(__name__)

RETRY_STATUS = {408, 429, 500, 502, 503, 504}

def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code in RETRY_STATUS
    return False

def _post(url: str, payload: dict, headers: dict | None = None) -> dict:
    retrying = Retrying(
        stop=stop_after_attempt(max(1, settings.LLM_MAX_ATTEMPTS)),
        wait=wait_exponential(multiplier=settings.LLM_BACKOFF_S, max=10),
        retry=retry_if_exception(_is_transient),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    try:
        for attempt in retrying:
            with attempt:
                r = requests.post(url, json=payload, headers=headers, timeout=settings.LLM_TIMEOUT_S)
                r.raise_for_status()
                return r.json()
    except requests.RequestException as e:
        raise GenerationError(f"LLM request failed: {e}") from e
    except ValueError as e:
        raise GenerationError(f"LLM returned a non-JSON body: {e}") from e

class LLMClient:
    """Send one system instruction plus one user message, get text back."""

    name = "base"

    def complete(self, system: str, user: str, *, json_mode: bool = False, max_tokens: int = 200) -> str:
        raise NotImplementedError

class OllamaClient(LLMClient):
    name = "ollama"

    def __init__(self, host: str, model: str):
        self.host = host.rstrip("/")
        self.model = model

    def complete(self, system, user, *, json_mode=False, max_tokens=200):
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "stream": False,
            "options": {
                "temperature": settings.LLM_TEMPERATURE,
                "top_p": settings.LLM_TOP_P,
                "num_predict": max_tokens,
            },
        }
        if json_mode:
            payload["format"] = "json"
        data = _post(f"{self.host}/api/chat", payload)
        try:
            return data["message"]["content"]
        except (KeyError, TypeError) as e:
            raise GenerationError(f"Unexpected Ollama response shape: {data!r:.200}") from e

class OpenAIClient(LLMClient):
    """Any OpenAI-compatible chat completions endpoint (Groq by default)."""

    name = "openai"

    def __init__(self, base_url: str, model: str, api_key: str):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key

    def complete(self, system, user, *, json_mode=False, max_tokens=200):
        if not self.api_key:
            raise GenerationError("OPENAI_API_KEY is not set")
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": settings.LLM_TEMPERATURE,
            "top_p": settings.LLM_TOP_P,
            "max_tokens": max_tokens,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = _post(f"{self.base_url}/chat/completions", payload, headers=headers)
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError(f"Unexpected completion shape: {data!r:.200}") from e

def get_llm_client() -> LLMClient:
    provider = settings.LLM_PROVIDER.lower()
    if provider == "ollama":
        return OllamaClient(settings.OLLAMA_HOST, settings.OLLAMA_MODEL)
    if provider == "openai":
        return OpenAIClient(settings.OPENAI_BASE_URL, settings.OPENAI_MODEL, settings.OPENAI_API_KEY)
    raise GenerationError(f"Unknown LLM provider: {settings.LLM_PROVIDER}")
