"""Downloadable renditions of a finished report."""

from __future__ import annotations

import html
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path

import markdown

from .models import Report, ResearchRequest

DEFAULT_FILENAME = "market-research-report.txt"
REPORT_TITLE = "MARKET RESEARCH REPORT"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6;
            max-width: 960px;
            margin: 0 auto;
            padding: 2rem;
            color: #333;
        }}
        h1 {{ border-bottom: 2px solid #eee; padding-bottom: 0.3em; }}
        h2 {{ border-bottom: 1px solid #eee; padding-bottom: 0.2em; }}
        .meta {{ color: #666; }}
        table {{ border-collapse: collapse; width: 100%; margin: 1em 0; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background-color: #f5f5f5; }}
    </style>
</head>
<body>
<h1>{title}</h1>
<p class="meta">Generated: {generated}<br>
Startup: {subject}<br>
Query: {query}</p>
{content}
</body>
</html>
"""


def _format_date(generated: date | None) -> str:
    generated = generated or datetime.now()
    return generated.strftime("%Y-%m-%d")


def render_text_document(
    report: Report,
    request: ResearchRequest,
    generated: date | None = None,
) -> str:
    """Plain-text download: fixed header, echoed inputs, then the full answer."""
    return (
        f"{REPORT_TITLE}\n"
        f"Generated: {_format_date(generated)}\n"
        "\n"
        f"Startup: {request.subject_description}\n"
        f"Query: {request.query}\n"
        "\n"
        f"{report.raw_text}\n"
    )


def render_html_document(
    report: Report,
    request: ResearchRequest,
    generated: date | None = None,
) -> str:
    """Render the answer's markdown to a standalone HTML page."""
    md = markdown.Markdown(extensions=["tables", "fenced_code"])
    content = md.convert(report.raw_text)
    return HTML_TEMPLATE.format(
        title="Market Research Report",
        generated=_format_date(generated),
        subject=html.escape(request.subject_description),
        query=html.escape(request.query),
        content=content,
    )


def report_to_dict(report: Report) -> dict[str, str]:
    return asdict(report)


def write_document(path: Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path
