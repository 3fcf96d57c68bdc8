"""Split a research answer into the five report sections."""

import re

from .models import Report


def _section_pattern(opening: str, closings: list[str]) -> re.Pattern[str]:
    lookahead = "|".join([rf"##?\s*{c}" for c in closings] + [r"\Z"])
    return re.compile(rf"##?\s*{opening}.*?(?={lookahead})", re.IGNORECASE | re.DOTALL)


# Each section is scanned independently over the full text, so headings
# that appear out of order can produce overlapping captures.
SECTION_PATTERNS: dict[str, re.Pattern[str]] = {
    "overview": _section_pattern(r"Market\s+Overview", ["Competitor", "Customer"]),
    "competitors": _section_pattern("Competitor", ["Customer", "Strategic"]),
    "pain_points": _section_pattern(r"Customer\s+Pain", ["Strategic", "Pitch"]),
    "recommendations": _section_pattern("Strategic", ["Pitch"]),
    "pitch_outline": _section_pattern("Pitch", []),
}


def extract_section(text: str, name: str) -> str:
    """Return the trimmed capture for one section, or "" if its heading is absent."""
    match = SECTION_PATTERNS[name].search(text)
    if match is None:
        return ""
    return match.group(0).strip()


class ReportExtractor:
    """Turns a raw research answer into a Report. Never raises."""

    def extract(self, raw_text: str) -> Report:
        text = raw_text or ""
        return Report(
            raw_text=text,
            **{name: extract_section(text, name) for name in SECTION_PATTERNS},
        )


def extract_report(raw_text: str) -> Report:
    return ReportExtractor().extract(raw_text)
