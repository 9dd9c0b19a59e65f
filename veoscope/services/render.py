"""Presentation of an analysis: structured sections when the reply parses, the raw text otherwise."""

from html import escape

from veoscope.models.analysis import (
    FailedState,
    InFlightState,
    ParsedAnalysis,
    SucceededState,
)
from veoscope.services.parser import parse_analysis
from veoscope.services.prompts import GLOBAL_COHESION_MARKER, SCENE_TABLE_HEADERS

COHESION_TITLE = GLOBAL_COHESION_MARKER
SCENE_TITLE = "Detailed Scene Breakdown"
TECHNICAL_TITLE = "Technical Style Analysis"

LOADING_MESSAGE = "Analyzing your video..."
LOADING_HINT = "This may take a few minutes for longer videos."

# None as an argument means "parsed, no structure"
UNPARSED = object()


# --- Markdown ---

def analysis_markdown(analysis: ParsedAnalysis) -> str:
    lines = [f"## {COHESION_TITLE}", "", analysis.global_cohesion_block, ""]
    lines += [f"## {SCENE_TITLE}", ""]
    lines.append("| " + " | ".join(SCENE_TABLE_HEADERS) + " |")
    lines.append("|" + "---|" * len(SCENE_TABLE_HEADERS))
    for row in analysis.scene_breakdown:
        lines.append(f"| {row.timestamp} | {row.action} | {row.notes} |")
    lines += ["", f"## {TECHNICAL_TITLE}", "", analysis.technical_analysis]
    return "\n".join(lines)


def render_markdown(text: str, parsed: ParsedAnalysis | None = UNPARSED) -> str:
    """Markdown for an analysis reply; the reply itself when it has no recognizable sections."""
    if parsed is UNPARSED:
        parsed = parse_analysis(text)
    if parsed is None:
        return text
    return analysis_markdown(parsed)


# --- HTML ---

def analysis_html(analysis: ParsedAnalysis) -> str:
    header_cells = "".join(f"<th>{escape(h)}</th>" for h in SCENE_TABLE_HEADERS)
    body_rows = "".join(
        f"<tr><td>{escape(row.timestamp)}</td><td>{escape(row.action)}</td><td>{escape(row.notes)}</td></tr>"
        for row in analysis.scene_breakdown
    )
    return (
        f'<section class="cohesion"><h2>{escape(COHESION_TITLE)}</h2>'
        f'<p class="prose">{escape(analysis.global_cohesion_block)}</p></section>'
        f'<section class="scenes"><h2>{escape(SCENE_TITLE)}</h2>'
        f"<table><thead><tr>{header_cells}</tr></thead><tbody>{body_rows}</tbody></table></section>"
        f'<section class="technical"><h2>{escape(TECHNICAL_TITLE)}</h2>'
        f'<pre class="prose">{escape(analysis.technical_analysis)}</pre></section>'
    )


def render_html(text: str, parsed: ParsedAnalysis | None = UNPARSED) -> str:
    if parsed is UNPARSED:
        parsed = parse_analysis(text)
    if parsed is None:
        return f'<pre class="raw">{escape(text)}</pre>'
    return analysis_html(parsed)


def render_state_html(state) -> str:
    """HTML fragment for the current session state. Idle renders nothing."""
    if isinstance(state, InFlightState):
        return (
            f'<div class="loader"><p>{LOADING_MESSAGE}</p>'
            f"<p class=\"hint\">{LOADING_HINT}</p></div>"
        )
    if isinstance(state, FailedState):
        return f'<div class="error" role="alert">{escape(state.error.message)}</div>'
    if isinstance(state, SucceededState):
        return f'<div class="result">{render_html(state.result.text, state.parsed)}</div>'
    return ""


_PAGE_STYLE = """
body { font-family: sans-serif; max-width: 56rem; margin: 2rem auto; padding: 0 1rem; }
.prose, .raw { white-space: pre-wrap; }
table { border-collapse: collapse; width: 100%; }
th, td { border: 1px solid #ccc; padding: 0.5rem; text-align: left; vertical-align: top; }
.error { border: 1px solid #b00; color: #b00; padding: 1rem; }
"""


def render_page(state) -> str:
    """Full upload page with the current state underneath the form."""
    disabled = " disabled" if isinstance(state, InFlightState) else ""
    label = "Analyzing..." if disabled else "Analyze Video"
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8"><title>Veoscope</title>'
        f"<style>{_PAGE_STYLE}</style></head><body>"
        "<header><h1>Veoscope</h1>"
        "<p>Upload a video to generate a detailed analysis for Veo prompts.</p></header>"
        '<form action="/analyze" method="post" enctype="multipart/form-data">'
        '<label for="video-upload">Upload Video</label> '
        '<input id="video-upload" name="file" type="file" accept="video/*" required> '
        "<small>MP4, MOV, WEBM, etc. (up to 15 mins)</small> "
        f'<button type="submit"{disabled}>{label}</button>'
        "</form>"
        f"<main>{render_state_html(state)}</main>"
        "</body></html>"
    )
