"""
Test Configuration and Fixtures
"""
from unittest import mock

import fitz
import pytest
import requests

from labscan.utils.config import TestingConfig


@pytest.fixture(scope='function')
def scratch_dir(tmp_path):
    """Empty scratch directory for PDF downloads"""
    d = tmp_path / "scratch"
    d.mkdir()
    return d


@pytest.fixture(scope='function')
def config(scratch_dir):
    """Testing config with both credentials set"""
    return TestingConfig(
        GEMINI_API_KEY='test-gemini-key',
        OCR_SPACE_API_KEY='test-ocr-key',
        SCRATCH_DIR=str(scratch_dir),
    )


@pytest.fixture(scope='function')
def bare_config(scratch_dir):
    """Testing config without any credentials"""
    return TestingConfig(SCRATCH_DIR=str(scratch_dir))


def build_pdf(*pages):
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line)
            y += 20
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture(scope='session')
def lab_pdf_bytes():
    """Two page lab report"""
    return build_pdf(
        ["Hemoglobin 13.5 g/dL", "WBC 6.2"],
        ["Glucose 98 mg/dL"],
    )


@pytest.fixture(scope='session')
def blank_pdf_bytes():
    """PDF with a single page and no text"""
    return build_pdf([])


def fake_response(status_code=200, json_data=None, content=b''):
    """requests.Response stand-in with working raise_for_status"""
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.content = content
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data

    def raise_for_status():
        if status_code >= 400:
            raise requests.HTTPError(f"{status_code} Error", response=resp)

    resp.raise_for_status.side_effect = raise_for_status
    return resp


@pytest.fixture
def make_response():
    return fake_response
