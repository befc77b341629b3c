"""Gemini wrapper.

Turns extracted lab report text into a short plain-language analysis.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from labscan.models import AnalysisResult, ResultStatus, is_retryable
from labscan.utils.config import Config, get_config

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "⚠ No readable text found in report."
NO_OUTPUT_MESSAGE = "⚠ Gemini returned no output."
FAILURE_MESSAGE = "⚠ AI analysis failed or took too long. Please try again."


def client_ready(cfg: Config) -> Tuple[bool, str]:
    if not cfg.GEMINI_API_KEY:
        return False, "GEMINI_API_KEY is missing"
    return True, ""


def clamp_text(s: str, limit: int) -> str:
    return (s or "")[:limit]


def analysis_prompt(report_text: str, limit: int = 3000) -> str:
    excerpt = clamp_text(report_text, limit)
    return f"""
You are an AI medical assistant. Analyze this lab report and respond clearly with:
1. Summary of findings
2. Possible health implications
3. Recommendations
4. Whether the report appears normal or abnormal
Keep the response concise (under 200 words).

Report:
{excerpt}
"""


def endpoint_url(cfg: Config) -> str:
    return f"{cfg.GEMINI_BASE_URL}/{cfg.GEMINI_MODEL}:generateContent"


def request_body(prompt: str, cfg: Config) -> Dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": cfg.generation_config(),
    }


def first_candidate_text(data: Any) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0].get("text") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""


def generate_analysis(extracted_text: Optional[str], config: Optional[Config] = None) -> AnalysisResult:
    """Ask Gemini for a short analysis of ``extracted_text``.

    Always returns a result with ``feedback`` set. A missing API key, too
    little text, an empty model reply and request failures each map to a
    fixed placeholder message and a matching status.
    """
    cfg = config or get_config()

    ok, msg = client_ready(cfg)
    if not ok:
        logger.error("AI analysis error: %s", msg)
        return AnalysisResult(FAILURE_MESSAGE, status=ResultStatus.FAILED, error=msg)

    if not extracted_text or len(extracted_text) < cfg.MIN_TEXT_CHARS:
        return AnalysisResult(NO_TEXT_MESSAGE, status=ResultStatus.EMPTY)

    prompt = analysis_prompt(extracted_text, cfg.MAX_PROMPT_CHARS)

    logger.info("Sending request to Gemini API (%s)", cfg.GEMINI_MODEL)
    try:
        r = requests.post(
            endpoint_url(cfg),
            params={"key": cfg.GEMINI_API_KEY},
            json=request_body(prompt, cfg),
            headers={"Content-Type": "application/json"},
            timeout=cfg.GEMINI_TIMEOUT,
        )
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        # the raw exception text can carry the request url, and with it the key
        err = f"{type(e).__name__}: {e}".replace(cfg.GEMINI_API_KEY, "***")
        logger.error("AI analysis error: %s", err)
        return AnalysisResult(
            FAILURE_MESSAGE,
            status=ResultStatus.FAILED,
            error=err,
            retryable=is_retryable(e),
            model=cfg.GEMINI_MODEL,
        )
    except ValueError as e:
        logger.error("AI analysis error: invalid JSON from Gemini: %s", e)
        return AnalysisResult(FAILURE_MESSAGE, status=ResultStatus.FAILED, error="Invalid JSON response", model=cfg.GEMINI_MODEL)

    text = first_candidate_text(data)
    if not text:
        logger.warning("Gemini returned no output")
        return AnalysisResult(NO_OUTPUT_MESSAGE, status=ResultStatus.EMPTY, model=cfg.GEMINI_MODEL)

    logger.info("AI analysis completed")
    return AnalysisResult(text, status=ResultStatus.OK, model=cfg.GEMINI_MODEL)
