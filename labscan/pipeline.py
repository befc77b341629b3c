"""
Report pipeline

Picks the extractor for a document and feeds its text into the analysis
generator. Extraction always runs first; an empty or failed extraction still
produces an analysis result carrying the "no readable text" placeholder.
"""
import logging
import os
from typing import Optional, Tuple, Union
from urllib.parse import urlparse

from labscan.models import AnalysisResult, DocumentType, ExtractionResult
from labscan.services.gemini_service import generate_analysis
from labscan.services.ocr_service import extract_text_from_image
from labscan.services.pdf_service import extract_text_from_pdf
from labscan.utils.config import Config, get_config

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".tif", ".tiff")


def detect_document_type(url: str) -> Optional[DocumentType]:
    path = urlparse((url or "").strip()).path
    ext = os.path.splitext(path)[1].lower()
    if ext == ".pdf":
        return DocumentType.PDF
    if ext in IMAGE_EXTENSIONS:
        return DocumentType.IMAGE
    return None


def _coerce_type(doc_type: Union[DocumentType, str, None], url: str) -> Optional[DocumentType]:
    if isinstance(doc_type, DocumentType):
        return doc_type
    if doc_type:
        try:
            return DocumentType((doc_type or "").strip().lower())
        except ValueError:
            return None
    return detect_document_type(url)


def extract_document_text(
    url: str,
    doc_type: Union[DocumentType, str, None] = None,
    config: Optional[Config] = None,
) -> ExtractionResult:
    cfg = config or get_config()
    kind = _coerce_type(doc_type, url)
    if kind == DocumentType.PDF:
        return extract_text_from_pdf(url, cfg)
    if kind == DocumentType.IMAGE:
        return extract_text_from_image(url, cfg)
    logger.error("Unsupported file type for %s (doc_type=%r)", url, doc_type)
    return ExtractionResult.failure("Unsupported file type", source=url)


def analyze_report(
    url: str,
    doc_type: Union[DocumentType, str, None] = None,
    config: Optional[Config] = None,
) -> Tuple[ExtractionResult, AnalysisResult]:
    cfg = config or get_config()
    extraction = extract_document_text(url, doc_type, cfg)
    if not extraction.ok:
        logger.warning("Extraction %s for %s: %s", extraction.status.value, url, extraction.error or "no text")
    analysis = generate_analysis(extraction.text, cfg)
    return extraction, analysis
