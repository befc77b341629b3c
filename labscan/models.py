"""
Result models

Key Models:
- ExtractionResult: text pulled out of a PDF or image, with status
- AnalysisResult: feedback generated for the extracted text, with status
"""
import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


class ResultStatus(enum.Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class DocumentType(enum.Enum):
    PDF = "pdf"
    IMAGE = "image"


def is_retryable(exc: BaseException) -> bool:
    """True for network failures worth another attempt (timeouts, 5xx, 429)."""
    if isinstance(exc, (requests.Timeout, requests.ConnectionError)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        code = exc.response.status_code
        return code == 429 or code >= 500
    return False


@dataclass
class ExtractionResult:
    text: str = ""
    status: ResultStatus = ResultStatus.EMPTY
    error: str = ""
    retryable: bool = False
    source: str = ""

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @classmethod
    def success(cls, text: str, source: str = "") -> "ExtractionResult":
        text = (text or "").strip()
        if not text:
            return cls.empty(source=source)
        return cls(text=text, status=ResultStatus.OK, source=source)

    @classmethod
    def empty(cls, source: str = "") -> "ExtractionResult":
        return cls(text="", status=ResultStatus.EMPTY, source=source)

    @classmethod
    def failure(cls, error: str, retryable: bool = False, source: str = "") -> "ExtractionResult":
        return cls(text="", status=ResultStatus.FAILED, error=error, retryable=retryable, source=source)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "status": self.status.value,
            "error": self.error,
            "retryable": self.retryable,
            "source": self.source,
        }


@dataclass
class AnalysisResult:
    feedback: str
    status: ResultStatus = ResultStatus.OK
    error: str = ""
    retryable: bool = False
    model: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    def to_dict(self, verbose: bool = False) -> Dict[str, Any]:
        """Serialize for JSON responses.

        The default shape is just ``{"feedback": ...}``; ``verbose`` adds the
        status fields so callers can decide whether to retry.
        """
        out: Dict[str, Any] = {"feedback": self.feedback}
        if verbose:
            out.update({
                "status": self.status.value,
                "error": self.error,
                "retryable": self.retryable,
                "model": self.model,
            })
        return out
