"""
Configuration management with AWS Parameter Store integration
"""
import logging
import os
import tempfile
from typing import Any, Dict, Optional

import boto3

logger = logging.getLogger(__name__)


def get_parameter(name: str, default: str = "") -> str:
    """Get parameter from environment or AWS Parameter Store"""
    # Environment variable takes precedence
    env_key = name.upper().replace("-", "_").replace("/", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if not os.environ.get("USE_PARAMETER_STORE"):
        return default

    try:
        ssm = boto3.client("ssm", region_name=os.environ.get("AWS_REGION", "us-west-2"))
        path = os.environ.get("PARAMETER_STORE_PATH", "/labscan/prod/")
        response = ssm.get_parameter(Name=f"{path}{name}", WithDecryption=True)
        return response["Parameter"]["Value"]
    except Exception as e:
        logger.warning("Could not load %s from Parameter Store: %s", name, e)
        return default


def _float_or_none(raw: Optional[str], default: Optional[float]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return default
    if raw.strip().lower() in ("none", "off"):
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid timeout value %r", raw)
        return default
    # non-positive values mean no timeout
    return value if value > 0 else None


class Config:
    """Base configuration.

    Credentials are read from the environment when the object is created, so
    each operation receives them explicitly instead of reading module globals.
    Keyword arguments override any attribute.
    """

    # Endpoints
    OCR_SPACE_URL = "https://api.ocr.space/parse/image"
    GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    # Timeouts (seconds)
    OCR_TIMEOUT = 20
    GEMINI_TIMEOUT = 30
    PDF_FETCH_TIMEOUT: Optional[float] = 30.0

    # Text limits
    MIN_TEXT_CHARS = 30
    MAX_PROMPT_CHARS = 3000

    # OCR.space
    OCR_LANGUAGE = "eng"

    # Gemini generation parameters
    GEMINI_MODEL = "gemini-1.5-flash-lite"
    GEMINI_TEMPERATURE = 0.4
    GEMINI_TOP_P = 0.95
    GEMINI_TOP_K = 40
    GEMINI_MAX_OUTPUT_TOKENS = 512

    def __init__(self, **overrides: Any):
        self.GEMINI_API_KEY = (os.environ.get("GEMINI_API_KEY") or "").strip()
        self.OCR_SPACE_API_KEY = (os.environ.get("OCR_SPACE_API_KEY") or "").strip()
        self.GEMINI_MODEL = (os.environ.get("GEMINI_MODEL") or "").strip() or type(self).GEMINI_MODEL
        self.SCRATCH_DIR = (os.environ.get("LABSCAN_SCRATCH_DIR") or "").strip() or tempfile.gettempdir()
        self.PDF_FETCH_TIMEOUT = _float_or_none(os.environ.get("PDF_FETCH_TIMEOUT"), type(self).PDF_FETCH_TIMEOUT)

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown config option: {key}")
            setattr(self, key, value)

    def generation_config(self) -> Dict[str, Any]:
        return {
            "temperature": self.GEMINI_TEMPERATURE,
            "topP": self.GEMINI_TOP_P,
            "topK": self.GEMINI_TOP_K,
            "maxOutputTokens": self.GEMINI_MAX_OUTPUT_TOKENS,
        }


class DevelopmentConfig(Config):
    """Development configuration"""


class ProductionConfig(Config):
    """Production configuration with Parameter Store"""

    def __init__(self, **overrides: Any):
        super().__init__(**overrides)
        if "GEMINI_API_KEY" not in overrides:
            self.GEMINI_API_KEY = get_parameter("gemini-api-key", self.GEMINI_API_KEY).strip()
        if "OCR_SPACE_API_KEY" not in overrides:
            self.OCR_SPACE_API_KEY = get_parameter("ocr-space-api-key", self.OCR_SPACE_API_KEY).strip()


class TestingConfig(Config):
    """Testing configuration"""
    __test__ = False  # keep pytest from collecting this class

    def __init__(self, **overrides: Any):
        overrides.setdefault("GEMINI_API_KEY", "")
        overrides.setdefault("OCR_SPACE_API_KEY", "")
        super().__init__(**overrides)


# Config dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env: Optional[str] = None) -> Config:
    """Get configuration for environment"""
    env = env or os.environ.get('LABSCAN_ENV', 'development')
    return config.get(env, config['default'])()
