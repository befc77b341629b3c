"""
labscan - lab report text extraction and AI analysis
"""
from labscan.models import AnalysisResult, DocumentType, ExtractionResult, ResultStatus
from labscan.pipeline import analyze_report, detect_document_type, extract_document_text
from labscan.services.gemini_service import generate_analysis
from labscan.services.ocr_service import extract_text_from_image
from labscan.services.pdf_service import extract_text_from_pdf
from labscan.utils.config import Config, get_config

__all__ = [
    "AnalysisResult",
    "Config",
    "DocumentType",
    "ExtractionResult",
    "ResultStatus",
    "analyze_report",
    "detect_document_type",
    "extract_document_text",
    "extract_text_from_image",
    "extract_text_from_pdf",
    "generate_analysis",
    "get_config",
]
