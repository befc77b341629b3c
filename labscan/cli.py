"""Command line entry point: labscan URL [--type pdf|image] [--extract-only] [--json]"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from labscan.models import ResultStatus
from labscan.pipeline import analyze_report, extract_document_text
from labscan.utils.config import get_config


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Extract text from a lab report URL and analyze it")
    ap.add_argument("url", help="URL of the PDF or image")
    ap.add_argument("--type", dest="doc_type", choices=["pdf", "image"], default=None,
                    help="Document type (default: guess from the URL extension)")
    ap.add_argument("--extract-only", action="store_true", help="Print the extracted text and stop")
    ap.add_argument("--json", action="store_true", help="Print JSON instead of plain text")
    ap.add_argument("--env", default=None, choices=["development", "production", "testing"])
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = get_config(args.env)

    if args.extract_only:
        extraction = extract_document_text(args.url, args.doc_type, cfg)
        if args.json:
            print(json.dumps(extraction.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(extraction.text if extraction.text else f"[{extraction.status.value}] {extraction.error}".strip())
        return 1 if extraction.status == ResultStatus.FAILED else 0

    extraction, analysis = analyze_report(args.url, args.doc_type, cfg)
    if args.json:
        print(json.dumps({
            "extraction": extraction.to_dict(),
            "analysis": analysis.to_dict(verbose=True),
        }, ensure_ascii=False, indent=2))
    else:
        print(analysis.feedback)

    failed = ResultStatus.FAILED in (extraction.status, analysis.status)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
