"""Remote PDF download and text extraction.

The PDF is written to a scratch file, parsed with PyMuPDF and the scratch
file removed again before returning.
"""
from __future__ import annotations

import logging
import os
import time
import uuid
from typing import List, Optional

import fitz  # PyMuPDF
import requests

from labscan.models import ExtractionResult, is_retryable
from labscan.utils.config import Config, get_config

logger = logging.getLogger(__name__)


def scratch_path(scratch_dir: str) -> str:
    stamp = int(time.time() * 1000)
    return os.path.join(scratch_dir, f"pdf_{stamp}_{uuid.uuid4().hex[:8]}.pdf")


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove scratch file %s: %s", path, e)


def page_fragments(page) -> List[str]:
    # words come back as (x0, y0, x1, y1, text, block_no, line_no, word_no)
    return [w[4] for w in page.get_text("words") if w[4]]


def pdf_file_text(path: str) -> str:
    with fitz.open(path) as doc:
        pages = [" ".join(page_fragments(page)) for page in doc]
    return " ".join(pages).strip()


def download_pdf(pdf_url: str, timeout: Optional[float]) -> bytes:
    r = requests.get(pdf_url, timeout=timeout)
    r.raise_for_status()
    return r.content


def extract_text_from_pdf(pdf_url: str, config: Optional[Config] = None) -> ExtractionResult:
    """Download ``pdf_url`` and return its text.

    Never raises: download, filesystem and parse failures come back as a
    FAILED result with empty text.
    """
    cfg = config or get_config()
    logger.info("Downloading PDF from: %s", pdf_url)

    try:
        data = download_pdf(pdf_url, cfg.PDF_FETCH_TIMEOUT)
    except requests.RequestException as e:
        logger.error("PDF download failed: %s", e)
        return ExtractionResult.failure(f"PDF download failed: {e}", retryable=is_retryable(e), source=pdf_url)
    except Exception as e:
        logger.error("PDF download failed: %s: %s", type(e).__name__, e)
        return ExtractionResult.failure(f"PDF download failed: {type(e).__name__}: {e}", source=pdf_url)

    path = scratch_path(cfg.SCRATCH_DIR)
    try:
        with open(path, "wb") as f:
            f.write(data)
        text = pdf_file_text(path)
    except Exception as e:
        logger.error("PDF extraction failed: %s: %s", type(e).__name__, e)
        return ExtractionResult.failure(f"PDF extraction failed: {type(e).__name__}: {e}", source=pdf_url)
    finally:
        _remove_quietly(path)

    if not text:
        logger.warning("PDF contained no extractable text: %s", pdf_url)
        return ExtractionResult.empty(source=pdf_url)
    return ExtractionResult.success(text, source=pdf_url)
