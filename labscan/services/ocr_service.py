"""OCR.space wrapper for image documents."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from labscan.models import ExtractionResult, is_retryable
from labscan.utils.config import Config, get_config

logger = logging.getLogger(__name__)


def ocr_ready(cfg: Config) -> Tuple[bool, str]:
    if not cfg.OCR_SPACE_API_KEY:
        return False, "OCR_SPACE_API_KEY is missing"
    return True, ""


def _error_message(data: Dict[str, Any]) -> str:
    msg = data.get("ErrorMessage") or data.get("ErrorDetails") or "OCR processing failed"
    if isinstance(msg, list):
        msg = "; ".join(str(m) for m in msg if m) or "OCR processing failed"
    return str(msg)


def parsed_text(data: Dict[str, Any]) -> str:
    results = data.get("ParsedResults")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return ""
    return (results[0].get("ParsedText") or "").strip()


def extract_text_from_image(image_url: str, config: Optional[Config] = None) -> ExtractionResult:
    cfg = config or get_config()
    ok, msg = ocr_ready(cfg)
    if not ok:
        logger.error("Image OCR skipped: %s", msg)
        return ExtractionResult.failure(msg, source=image_url)

    logger.info("Extracting text using OCR.space: %s", image_url)
    try:
        r = requests.post(
            cfg.OCR_SPACE_URL,
            data={
                "url": image_url,
                "language": cfg.OCR_LANGUAGE,
                "isOverlayRequired": "false",
            },
            headers={"apikey": cfg.OCR_SPACE_API_KEY},
            timeout=cfg.OCR_TIMEOUT,
        )
        r.raise_for_status()
        data = r.json()
    except requests.RequestException as e:
        logger.error("Image OCR failed: %s", e)
        return ExtractionResult.failure(f"Image OCR failed: {e}", retryable=is_retryable(e), source=image_url)
    except ValueError as e:
        logger.error("Image OCR returned invalid JSON: %s", e)
        return ExtractionResult.failure("Image OCR returned invalid JSON", source=image_url)

    if not isinstance(data, dict):
        return ExtractionResult.failure("Image OCR returned an unexpected payload", source=image_url)

    text = parsed_text(data)
    if data.get("IsErroredOnProcessing"):
        err = _error_message(data)
        if not text:
            logger.error("Image OCR failed: %s", err)
            return ExtractionResult.failure(err, source=image_url)
        logger.warning("Image OCR reported an error but returned text: %s", err)
    if not text:
        logger.warning("OCR returned no readable text: %s", image_url)
    return ExtractionResult.success(text, source=image_url)
