"""
modules/tool_usage/tip_tool.py
-------------------------------
Optional one-line local tip per day, generated with Gemini.

Non-critical: any failure (stub mode, missing key, timeout, empty text)
comes back as a `day_tip` DependencyError and the day simply has no tip.
Tips are cached for TIP_CACHE_TTL by a stable hash of the day context.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from google import genai

from goaguide import config
from goaguide.db.cache import TTLCache, get_cache, make_cache_key
from goaguide.schemas.result import DependencyResult

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are GoaGuide AI. Return one short local tip for the day (max 20 words). "
    "Example: \"Carry cash for Anjuna flea market; sunsets best 6:15-6:40pm at Vagator.\" "
    "Output plain text only."
)


class DayTipTool:

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        client: Any = None,
        use_stub: bool = config.USE_STUB_LLM,
        model: str = config.LLM_MODEL_NAME,
    ) -> None:
        self.cache    = cache if cache is not None else get_cache()
        self.use_stub = use_stub
        self.model    = model
        self._client  = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(
                api_key=config.GEMINI_API_KEY,
                http_options={"timeout": int(config.LLM_TIMEOUT_S * 1000)},
            )
        return self._client

    def fetch(self, day_context: dict) -> DependencyResult[str]:
        if self.use_stub or (self._client is None and not config.GEMINI_API_KEY):
            return DependencyResult.failure("day_tip", "LLM not configured")

        key = make_cache_key("day_tip", day_context)
        cached = self.cache.get(key)
        if cached is not None:
            return DependencyResult.success(cached)

        prompt = f"{_SYSTEM_PROMPT}\n\nDay context: {json.dumps(day_context, default=str)}"
        try:
            response = self.client.models.generate_content(model=self.model, contents=prompt)
        except Exception as exc:
            logger.warning("Day tip generation failed: %s", exc)
            return DependencyResult.failure("day_tip", str(exc))

        text = (getattr(response, "text", None) or "").strip().strip('"')
        if not text:
            return DependencyResult.failure("day_tip", "empty LLM response")

        self.cache.set(key, text, ttl=config.TIP_CACHE_TTL)
        return DependencyResult.success(text)
