"""Best-effort extraction of the three analysis sections from Gemini's free-text reply."""

import logging
import re

from veoscope.exceptions import ParseFailure
from veoscope.models.analysis import ParsedAnalysis, TableRow
from veoscope.services.prompts import (
    GLOBAL_COHESION_MARKER,
    SCENE_BREAKDOWN_MARKER,
    TECHNICAL_ANALYSIS_MARKER,
)

logger = logging.getLogger(__name__)

_COHESION_RE = re.compile(
    re.escape(GLOBAL_COHESION_MARKER) + r"(.*?)" + re.escape(SCENE_BREAKDOWN_MARKER),
    re.DOTALL,
)
_TABLE_RE = re.compile(
    re.escape(SCENE_BREAKDOWN_MARKER) + r"(.*?)" + re.escape(TECHNICAL_ANALYSIS_MARKER),
    re.DOTALL,
)
_TECHNICAL_RE = re.compile(re.escape(TECHNICAL_ANALYSIS_MARKER) + r"(.*)", re.DOTALL)

# Header row and Markdown separator row
_TABLE_PREAMBLE_LINES = 2


def _section(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def _parse_row(line: str) -> TableRow | None:
    cells = [cell.strip() for cell in line.split("|")]
    cells = [cell for cell in cells if cell]
    if len(cells) != 3:
        return None
    return TableRow(timestamp=cells[0], action=cells[1], notes=cells[2])


def parse_table(block: str) -> list[TableRow]:
    """Rows of a Markdown table block, skipping its first two lines.

    Lines that do not have exactly three non-empty cells are dropped.
    """
    rows = []
    for line in block.split("\n")[_TABLE_PREAMBLE_LINES:]:
        row = _parse_row(line)
        if row is not None:
            rows.append(row)
    return rows


def _extract(text: str) -> ParsedAnalysis:
    global_cohesion_block = _section(_COHESION_RE, text)
    scene_breakdown = parse_table(_section(_TABLE_RE, text))
    technical_analysis = _section(_TECHNICAL_RE, text)

    if not global_cohesion_block and not scene_breakdown and not technical_analysis:
        raise ParseFailure("No analysis sections found in model output")

    return ParsedAnalysis(
        global_cohesion_block=global_cohesion_block,
        scene_breakdown=scene_breakdown,
        technical_analysis=technical_analysis,
    )


def parse_analysis(text: str) -> ParsedAnalysis | None:
    """Split the model reply into its three sections.

    Returns None when nothing could be extracted; callers fall back to the raw text.
    Partial results (one or two empty sections) are returned as-is.
    """
    try:
        return _extract(text)
    except ParseFailure as e:
        logger.info("Falling back to raw analysis text: %s", e)
        return None
    except Exception:
        logger.exception("Failed to parse analysis result")
        return None
