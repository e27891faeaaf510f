"""
mathpix-request: build (and optionally send) a Mathpix OCR request

    mathpix-request text page.png --formats text,data --alphabets en,ru
    mathpix-request latex https://example.com/eq.jpg --formats latex_styled --beam-size 3
    mathpix-request pdf paper.pdf --conversion-formats docx,tex.zip --send
    mathpix-request strokes strokes.json --formats text

Prints the JSON request body unless --send is given, in which case the
server's JSON response is printed instead.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .client import MathpixClient
from .endpoint import Endpoint, EndpointKind, EndpointRegistry
from .errors import BadOptionError, MathpixError
from .options import LaTeXOptions, PdfOptions, StrokesOptions, TextOptions

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def _csv(raw: Optional[str]) -> List[str]:
    # "text, data" -> ["text", "data"]
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _pair(option: str, raw: str) -> List[str]:
    # "\(,\)" -> ["\(", "\)"]
    parts = raw.split(",")
    if len(parts) != 2:
        raise BadOptionError(option, raw, "expected begin,end")
    return parts


def _metadata(raw: Optional[str]) -> Optional[Dict]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MathpixError("--metadata must be a JSON object", cause=e) from e


# ============================================================================
# Per-endpoint option builders
# ============================================================================

def _text_options(args: argparse.Namespace) -> TextOptions:
    options = (
        TextOptions()
        .add_formats(_csv(args.formats))
        .set_data_options(_csv(args.data_options))
        .set_alphabets_allowed(_csv(args.alphabets))
    )
    if args.confidence_threshold is not None:
        options = options.set_confidence_threshold(args.confidence_threshold)
    if args.confidence_rate_threshold is not None:
        options = options.set_confidence_rate_threshold(args.confidence_rate_threshold)
    if args.include_line_data:
        options = options.set_include_line_data(True)
    if args.include_word_data:
        options = options.set_include_word_data(True)
    if args.include_detected_alphabets:
        options = options.set_include_detected_alphabets(True)
    if args.rm_spaces is not None:
        options = options.set_rm_spaces(args.rm_spaces)
    metadata = _metadata(args.metadata)
    if metadata is not None:
        options = options.set_metadata(metadata)
    return options


def _latex_options(args: argparse.Namespace) -> LaTeXOptions:
    options = (
        LaTeXOptions()
        .add_formats(_csv(args.formats))
        .set_ocr(_csv(args.ocr))
        .add_transforms(_csv(args.transforms))
    )
    if args.math_delims is not None:
        options = options.set_math_delims(*_pair("math_delims", args.math_delims))
    if args.displaymath_delims is not None:
        options = options.set_displaymath_delims(*_pair("displaymath_delims", args.displaymath_delims))
    if args.confidence_threshold is not None:
        options = options.set_confidence_threshold(args.confidence_threshold)
    # beam_size first so n_best is checked against it
    if args.beam_size is not None:
        options = options.set_beam_size(args.beam_size)
    if args.n_best is not None:
        options = options.set_n_best(args.n_best)
    if args.region is not None:
        options = options.set_region(args.region)
    if args.skip_recrop:
        options = options.set_skip_recrop(True)
    metadata = _metadata(args.metadata)
    if metadata is not None:
        options = options.set_metadata(metadata)
    return options


def _pdf_options(args: argparse.Namespace) -> PdfOptions:
    options = (
        PdfOptions()
        .add_conversion_formats(_csv(args.conversion_formats))
        .set_alphabets_allowed(_csv(args.alphabets))
    )
    if args.page_ranges is not None:
        options = options.set_page_ranges(args.page_ranges)
    if args.rm_spaces is not None:
        options = options.set_rm_spaces(args.rm_spaces)
    metadata = _metadata(args.metadata)
    if metadata is not None:
        options = options.set_metadata(metadata)
    return options


def _strokes_options(args: argparse.Namespace) -> StrokesOptions:
    options = (
        StrokesOptions()
        .add_formats(_csv(args.formats))
        .set_data_options(_csv(args.data_options))
    )
    metadata = _metadata(args.metadata)
    if metadata is not None:
        options = options.set_metadata(metadata)
    return options


def _strokes_source(raw: str) -> str:
    # a path to a JSON file, or the JSON itself
    path = Path(raw)
    if raw.lstrip().startswith("{"):
        return raw
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise MathpixError(f"Could not read strokes file {raw!r}", cause=e) from e


OPTION_BUILDERS: Dict[EndpointKind, Callable[[argparse.Namespace], object]] = {
    EndpointKind.TEXT: _text_options,
    EndpointKind.LATEX: _latex_options,
    EndpointKind.PDF: _pdf_options,
    EndpointKind.STROKES: _strokes_options,
}


# ============================================================================
# Parser
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathpix-request", description="Build and send Mathpix OCR requests"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--send", action="store_true", help="Send the request and print the response")
    common.add_argument("--metadata", help="Metadata as a JSON object")
    common.add_argument("--app-id", help="Overrides MATHPIX_APP_ID")
    common.add_argument("--app-key", help="Overrides MATHPIX_APP_KEY")
    common.add_argument("--timeout", type=float, help="Request timeout in seconds")

    subparsers = parser.add_subparsers(dest="endpoint", required=True)

    text = subparsers.add_parser("text", parents=[common], help="v3/text")
    text.add_argument("source", help="Image path (jpg/png) or URL")
    text.add_argument("--formats", help="Comma-separated: text,data,html,latex_styled")
    text.add_argument("--data-options", help="Comma-separated, e.g. include_latex,!include_svg")
    text.add_argument("--alphabets", help="Comma-separated, e.g. en,ru,!th or all")
    text.add_argument("--confidence-threshold")
    text.add_argument("--confidence-rate-threshold")
    text.add_argument("--include-line-data", action="store_true")
    text.add_argument("--include-word-data", action="store_true")
    text.add_argument("--include-detected-alphabets", action="store_true")
    text.add_argument("--rm-spaces", choices=["true", "false"])

    latex = subparsers.add_parser("latex", parents=[common], help="v3/latex")
    latex.add_argument("source", help="Image path (jpg/png) or URL")
    latex.add_argument("--formats", help="Comma-separated, e.g. latex_styled,asciimath")
    latex.add_argument("--ocr", help="math or math,text")
    latex.add_argument("--transforms", help="Comma-separated, e.g. rm_spaces,rm_fonts")
    latex.add_argument("--math-delims", help="begin,end")
    latex.add_argument("--displaymath-delims", help="begin,end")
    latex.add_argument("--confidence-threshold")
    latex.add_argument("--beam-size")
    latex.add_argument("--n-best")
    latex.add_argument("--region", help="top_left_x,top_left_y,width,height")
    latex.add_argument("--skip-recrop", action="store_true")

    pdf = subparsers.add_parser("pdf", parents=[common], help="v3/pdf")
    pdf.add_argument("source", help="PDF path or URL")
    pdf.add_argument("--conversion-formats", help="Comma-separated: md,docx,tex.zip,html")
    pdf.add_argument("--alphabets", help="Comma-separated, e.g. en,!ru")
    pdf.add_argument("--page-ranges", help='e.g. "2,4-6"')
    pdf.add_argument("--rm-spaces", choices=["true", "false"])

    strokes = subparsers.add_parser("strokes", parents=[common], help="v3/strokes")
    strokes.add_argument("source", help='JSON file or inline JSON: {"x": [[...]], "y": [[...]]}')
    strokes.add_argument("--formats", help="Comma-separated: text,html,data")
    strokes.add_argument("--data-options", help="Comma-separated, e.g. include_latex")

    return parser


def build_endpoint(args: argparse.Namespace) -> Endpoint:
    """
    Raises:
        MathpixError: any invalid source or option value
    """
    kind = EndpointKind(args.endpoint)
    source = _strokes_source(args.source) if kind is EndpointKind.STROKES else args.source
    options = OPTION_BUILDERS[kind](args)
    return EndpointRegistry.create(kind, source, options)


def _send(args: argparse.Namespace, endpoint: Endpoint) -> dict:
    kwargs = {}
    if args.timeout is not None:
        kwargs["timeout"] = args.timeout
    client = MathpixClient(app_id=args.app_id, app_key=args.app_key, **kwargs)
    return asyncio.run(client.send(endpoint))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        endpoint = build_endpoint(args)
        if args.send:
            output = _send(args, endpoint)
        else:
            output = endpoint.to_request_body()
    except MathpixError as e:
        logger.debug("Request failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
