# src/dealcheck/domain/ports.py
from __future__ import annotations

from typing import Protocol


# ----------------------------
# Narrative service (free-text commentary on a deal)
# ----------------------------

class NarrativeService(Protocol):
    async def __call__(self, prompt: str) -> str | None:
        ...
