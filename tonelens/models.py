# tonelens/models.py
from __future__ import annotations

"""
Tonelens upstream services

- ToneService:
    Sends text to an IBM Watson compatible tone analyzer
    (POST <url>/v3/tone?version=..., Basic auth apikey:<key>) and parses the
    response into an AnalysisResult.

- GeneratorService:
    Summarizes or extends text using a provider chain with retries/backoff:
      1) DeepAI standard API (primary, if configured)
      2) OpenAI-compatible chat endpoint (optional fallback)
    The first provider that succeeds returns the output.

All configuration comes from an explicit tonelens.settings.Settings instance.
"""

import time
import random
from typing import Any, Dict, List, Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from .logger import get_logger
from .metrics import UPSTREAM_ERRORS
from .schemas import AnalysisResult
from .settings import Settings

log = get_logger(__name__)

SUMMARIZATION = "summarization"
TEXT_GENERATOR = "text-generator"


class ServiceNotConfigured(RuntimeError):
    """Raised when a service is called without the credentials it needs."""


def response_output(resp: requests.Response) -> Optional[str]:
    """The "output" string of a {"output": ...} JSON body, or None."""
    try:
        body = resp.json()
    except ValueError:
        return None
    output = body.get("output") if isinstance(body, dict) else None
    return output if isinstance(output, str) and output else None


# ------------------------ HTTP base ------------------------
class BaseProvider:
    name: str

    def __init__(self, name: str, timeout: float = 60.0) -> None:
        self.name = name
        self.timeout = timeout

    def _sleep_backoff(self, attempt: int, retry_after: Optional[str]) -> None:
        # Honor Retry-After if present; otherwise exponential backoff with jitter
        if retry_after:
            try:
                time.sleep(float(retry_after))
                return
            except ValueError:
                pass
        base = 1.0
        time.sleep(base * (2 ** attempt) + random.uniform(0, 0.5))

    def _post(self, url: str, max_retries: int = 3, **kwargs: Any) -> requests.Response:
        for attempt in range(max_retries + 1):
            resp = requests.post(url, timeout=self.timeout, **kwargs)
            if resp.status_code < 400:
                return resp
            if resp.status_code in (429, 503) and attempt < max_retries:
                log.warning("upstream throttled", provider=self.name, status=resp.status_code, attempt=attempt)
                self._sleep_backoff(attempt, resp.headers.get("Retry-After"))
                continue
            resp.raise_for_status()

        # Should not reach here
        resp.raise_for_status()
        raise RuntimeError(f"{self.name}: unexpected")


# ------------------------ Tone analyzer ------------------------
class ToneAnalyzerClient(BaseProvider):
    def __init__(self, base_url: str, api_key: str, version: str = "2017-09-21", timeout: float = 60.0) -> None:
        super().__init__("tone-analyzer", timeout)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.version = version

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v3/tone?version={self.version}"

    def analyse(self, text: str, max_retries: int = 3) -> AnalysisResult:
        resp = self._post(
            self.endpoint,
            max_retries=max_retries,
            json={"text": text},
            headers={"Content-Type": "application/json"},
            auth=HTTPBasicAuth("apikey", self.api_key),
        )
        return AnalysisResult.model_validate(resp.json())


class ToneService:
    """Analyse text once it is long enough to be worth sending."""

    def __init__(self, settings: Settings) -> None:
        self.min_length = settings.MIN_TEXT_LENGTH
        self.max_retries = settings.MAX_RETRIES
        self.client: Optional[ToneAnalyzerClient] = None
        if settings.TONE_ANALYZER_URL and settings.TONE_ANALYZER_APIKEY:
            self.client = ToneAnalyzerClient(
                base_url=settings.TONE_ANALYZER_URL,
                api_key=settings.TONE_ANALYZER_APIKEY,
                version=settings.TONE_ANALYZER_VERSION,
                timeout=settings.REQUEST_TIMEOUT,
            )

    def should_analyse(self, text: str) -> bool:
        return bool(text) and len(text) > self.min_length

    def analyse(self, text: str) -> Optional[AnalysisResult]:
        """Returns None for text too short to analyse."""
        if not self.should_analyse(text):
            return None
        if self.client is None:
            raise ServiceNotConfigured(
                "Tone analyzer not configured. Set TONE_ANALYZER_URL and TONE_ANALYZER_APIKEY in .env."
            )
        start = time.time()
        try:
            result = self.client.analyse(text, max_retries=self.max_retries)
        except Exception as e:
            UPSTREAM_ERRORS.labels(self.client.name).inc()
            log.warning("tone analysis failed", error=str(e), chars=len(text))
            raise
        log.info(
            "tone analysis done",
            chars=len(text),
            sentences=len(result.sentences_tone),
            latency_ms=int((time.time() - start) * 1000),
        )
        return result


# ------------------------ Text providers ------------------------
class BaseTextProvider(BaseProvider):
    def complete(self, task: str, text: str, max_retries: int = 3) -> str:
        raise NotImplementedError


class DeepAIProvider(BaseTextProvider):
    """
    DeepAI standard API: POST <base>/<model> with form field "text",
    responds with {"output": "..."}.
    """

    def __init__(self, api_key: str, base_url: str = "https://api.deepai.org/api", timeout: float = 60.0) -> None:
        super().__init__("deepai", timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def complete(self, task: str, text: str, max_retries: int = 3) -> str:
        resp = self._post(
            f"{self.base_url}/{task}",
            max_retries=max_retries,
            data={"text": text},
            headers={"api-key": self.api_key},
        )
        output = response_output(resp)
        if not output:
            raise ValueError(f"DeepAI {task}: empty output")
        return output


class OpenAIProvider(BaseTextProvider):
    PROMPTS = {
        SUMMARIZATION: "Summarize the user's text in a few sentences without adding facts.",
        TEXT_GENERATOR: "Continue the user's text in the same voice. Return the original text followed by the continuation.",
    }

    def __init__(self, api_key: str, base_url: str, model: str, timeout: float = 60.0) -> None:
        super().__init__("openai", timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model

    def _extract_text(self, resp_json: Dict[str, Any]) -> str:
        try:
            return resp_json["choices"][0]["message"]["content"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ValueError(f"{self.name}: unexpected response shape") from e

    def complete(self, task: str, text: str, max_retries: int = 3) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.PROMPTS[task]},
                {"role": "user", "content": text},
            ],
            "temperature": 0.5,
            "max_tokens": 400,
        }
        resp = self._post(
            f"{self.base_url}/chat/completions",
            max_retries=max_retries,
            json=payload,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        return self._extract_text(resp.json())


# ------------------------ Generator service with fallback chain ------------------------
class GeneratorService:
    """
    Try DeepAI -> OpenAI-compatible with retry/backoff.
    Configure via .env (Settings):
      DEEPAI_APIKEY, DEEPAI_BASE_URL (optional)
      OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_MODEL (optional)
    """

    def __init__(self, settings: Settings) -> None:
        self.max_retries = settings.MAX_RETRIES
        self.providers: List[BaseTextProvider] = []

        if settings.DEEPAI_APIKEY:
            self.providers.append(
                DeepAIProvider(
                    api_key=settings.DEEPAI_APIKEY,
                    base_url=settings.DEEPAI_BASE_URL,
                    timeout=settings.REQUEST_TIMEOUT,
                )
            )

        if settings.OPENAI_API_KEY and settings.OPENAI_BASE_URL:
            self.providers.append(
                OpenAIProvider(
                    api_key=settings.OPENAI_API_KEY,
                    base_url=settings.OPENAI_BASE_URL,
                    model=settings.OPENAI_MODEL,
                    timeout=settings.REQUEST_TIMEOUT,
                )
            )

    def summarize(self, text: str) -> Tuple[str, int]:
        return self._run(SUMMARIZATION, text)

    def generate(self, text: str) -> Tuple[str, int]:
        return self._run(TEXT_GENERATOR, text)

    def _run(self, task: str, text: str) -> Tuple[str, int]:
        if not self.providers:
            raise ServiceNotConfigured(
                "No text providers configured. Set DEEPAI_APIKEY, "
                "or OPENAI_API_KEY and OPENAI_BASE_URL in .env."
            )
        start = time.time()
        last_err: Optional[Exception] = None
        for provider in self.providers:
            try:
                content = provider.complete(task, text, max_retries=self.max_retries)
            except Exception as e:
                UPSTREAM_ERRORS.labels(provider.name).inc()
                log.warning("provider failed", provider=provider.name, task=task, error=str(e))
                last_err = e
                continue
            latency_ms = int((time.time() - start) * 1000)
            log.info("provider succeeded", provider=provider.name, task=task, latency_ms=latency_ms)
            return content, latency_ms

        raise last_err
