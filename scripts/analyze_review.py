"""
analyze_review.py — score a restaurant review against a running ReviewSift server.

Usage:
    python scripts/analyze_review.py "The lasagna was perfectly al dente" --restaurant "Mario's"
    python scripts/analyze_review.py --file review.txt --restaurant "Dragon Sushi House"
    cat review.txt | python scripts/analyze_review.py -
    python scripts/analyze_review.py --url http://reviewsift.internal:8000 "..."
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from reviewsift.client import (  # noqa: E402
    DEFAULT_BASE_URL,
    AnalysisRejectedError,
    ReviewSiftClient,
    split_reason,
    verdict_title,
)
from reviewsift.schemas.analysis import AnalysisResult  # noqa: E402

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _read_review(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if args.review == "-":
        return sys.stdin.read()
    return args.review or ""


def render(result: AnalysisResult) -> str:
    """Format a verdict the way the web page lays it out."""
    title, subtitle = verdict_title(result.trust_score)
    heading = "Red Flags Detected" if result.is_suspicious else "Trust Indicators Found"
    lines = [
        f"{result.restaurant}: {result.trust_score}%",
        f"{title} — {subtitle}",
        "",
        result.explanation,
        "",
        heading,
    ]
    for reason in result.reasons:
        factor, detail = split_reason(reason)
        lines.append(f"  - {factor}: {detail}" if factor else f"  - {detail}")
    return "\n".join(lines)


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Check a restaurant review for authenticity.")
    parser.add_argument("review", nargs="?", help="Review text, or '-' to read stdin")
    parser.add_argument("--file", help="Read the review text from a file")
    parser.add_argument("--restaurant", default="", help="Restaurant name (optional)")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="ReviewSift server URL")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    args = parser.parse_args()

    review_text = _read_review(args)
    client = ReviewSiftClient(base_url=args.url, timeout=args.timeout)

    try:
        result = client.analyze(review_text, args.restaurant)
    except AnalysisRejectedError as exc:
        logger.error("Server rejected the request (HTTP %d): %s", exc.status_code, exc)
        return 1

    if result is None:
        parser.error("review text is required")

    print(render(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
