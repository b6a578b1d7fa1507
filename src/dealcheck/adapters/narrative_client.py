# src/dealcheck/adapters/narrative_client.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import requests

from dealcheck.adapters.config import config

SYSTEM_PROMPT = (
    "You are a pragmatic UK buy-to-let analyst. Comment on the deal you are given "
    "in plain English, in at most five short lines. Do not invent figures."
)


class NarrativeError(RuntimeError):
    pass


@dataclass(frozen=True)
class NarrativeClient:
    """
    OpenAI-compatible chat-completions client.

    One request per prompt, no retries: the commentary is best-effort and the
    caller treats any failure as "no commentary".
    """
    base_url: str
    api_key: str
    model: str = "gpt-4o-mini"
    timeout_s: float = 15.0

    def complete(self, prompt: str) -> str:
        url = self.base_url.rstrip("/") + "/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.3,
        }

        resp = requests.post(url, headers=headers, json=body, timeout=self.timeout_s)
        if resp.status_code >= 400:
            raise NarrativeError(f"Narrative HTTP {resp.status_code}: {resp.text[:200]}")

        payload = resp.json()
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise NarrativeError(f"Unexpected narrative response shape: {payload!r}") from e
        if not isinstance(content, str):
            raise NarrativeError(f"Narrative content is not text: {type(content)}")
        return content

    async def __call__(self, prompt: str) -> str | None:
        # requests is blocking; keep it off the event loop
        return await asyncio.to_thread(self.complete, prompt)


def make_narrative_client() -> NarrativeClient | None:
    """Client built from config, or None when no API key is configured."""
    if not config.NARRATIVE_API_KEY:
        return None
    return NarrativeClient(
        base_url=config.NARRATIVE_BASE_URL,
        api_key=config.NARRATIVE_API_KEY,
        model=config.NARRATIVE_MODEL,
        timeout_s=config.NARRATIVE_TIMEOUT_S,
    )
