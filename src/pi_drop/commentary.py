"""
Natural-language commentary on the current estimate.

One outbound call to the Gemini `generateContent` REST endpoint. The call is
purely cosmetic: every failure (no API key, network error, timeout, HTTP
error, unexpected payload) is logged and replaced by FALLBACK_INSIGHT.
Callers never see an exception from `get_pi_insight`.
"""
import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import requests

from . import settings
from .convergence_tracker import SimulationStats

logger = logging.getLogger(__name__)


FALLBACK_INSIGHT = (
    "The laws of probability are currently contemplating your request. "
    "Try dropping more balls!"
)


class CommentaryError(Exception):
    """Base exception for commentary failures."""


class CommentaryConfigError(CommentaryError):
    """Raised when no API credential is configured."""


class CommentaryNetworkError(CommentaryError):
    """Raised on transport errors, timeouts and non-2xx responses."""


class CommentaryProtocolError(CommentaryError):
    """Raised when the service answers but the payload has no usable text."""


def build_prompt(stats: SimulationStats) -> str:
    return (
        "I am running a Monte Carlo simulation to calculate Pi using a circle "
        "with an inscribed square.\n"
        "Current Statistics:\n"
        f"- Total balls dropped (all in circle): {stats.total_in_circle}\n"
        f"- Balls landed inside the inscribed square: {stats.total_in_square}\n"
        f"- Current Pi estimation: {stats.estimated_pi:.6f}\n"
        f"- Percentage Error: {stats.error * 100:.4f}%\n\n"
        "Provide a brief, witty, and educational mathematical insight about these "
        "results. Explain why the approximation improves with more samples or "
        "comment on the current accuracy. Keep it under 60 words."
    )


def _extract_text(payload) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text", "") for p in parts).strip()
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise CommentaryProtocolError(f"Unexpected response shape: {e}") from e
    if not text:
        raise CommentaryProtocolError("Response contained no text.")
    return text


def request_insight(
    stats: SimulationStats,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Perform the call and return the generated text.
    Raises a CommentaryError subclass on any failure.
    """
    api_key = api_key or settings.GEMINI_API_KEY
    if not api_key:
        raise CommentaryConfigError("GEMINI_API_KEY (or API_KEY) is not set.")
    model = model or settings.GEMINI_MODEL
    timeout = timeout if timeout is not None else settings.COMMENTARY_TIMEOUT_S

    url = f"{settings.GEMINI_ENDPOINT.rstrip('/')}/models/{model}:generateContent"
    body = {"contents": [{"parts": [{"text": build_prompt(stats)}]}]}

    try:
        response = requests.post(
            url,
            json=body,
            headers={"x-goog-api-key": api_key},
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        raise CommentaryNetworkError(f"Network error calling {model}: {e}") from e
    except (UnicodeError, ValueError) as e:
        # e.g. a key that cannot be encoded into the request header
        raise CommentaryConfigError(f"Invalid API key or request for {model}: {e}") from e

    if not response.ok:
        raise CommentaryNetworkError(
            f"{model} returned HTTP {response.status_code}: {response.text[:200]}"
        )

    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise CommentaryProtocolError(f"Invalid JSON from {model}: {e}") from e

    return _extract_text(payload)


def get_pi_insight(stats: SimulationStats, **kwargs) -> str:
    """Like request_insight, but any failure yields FALLBACK_INSIGHT."""
    try:
        return request_insight(stats, **kwargs)
    except CommentaryError as e:
        logger.warning("Commentary unavailable: %s", e)
        return FALLBACK_INSIGHT
    except Exception:
        logger.exception("Commentary failed unexpectedly.")
        return FALLBACK_INSIGHT


# ------------------------------------------------------------
# Fire-and-forget
# ------------------------------------------------------------

_executor: Optional[ThreadPoolExecutor] = None


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="commentary")
    return _executor


def request_insight_async(
    stats: SimulationStats,
    callback: Optional[Callable[[str], None]] = None,
    **kwargs,
) -> "Future[str]":
    """
    Submit get_pi_insight to a background worker and return immediately.
    The stats are a frozen snapshot, so the simulation may keep running.
    `callback`, if given, runs on the worker thread with the final string.
    """
    def job() -> str:
        text = get_pi_insight(stats, **kwargs)
        if callback is not None:
            callback(text)
        return text

    return _get_executor().submit(job)
