import datetime

from veoscope.models.analysis import (
    AnalysisFailure,
    AnalysisSuccess,
    FailedState,
    IdleState,
    InFlightState,
    SucceededState,
)
from veoscope.services.parser import parse_analysis
from veoscope.services.render import render_html, render_markdown, render_page, render_state_html
from conftest import DOG_ANALYSIS, NO_MARKERS


class TestRenderMarkdown:
    def test_structured_sections(self):
        md = render_markdown(DOG_ANALYSIS)
        assert md.startswith("## GLOBAL COHESION BLOCK\n\nCharacters: a dog")
        assert "| Timestamp Range (Start - End) | Core Action & Emotional Beat | Visual, Technical & Sound Notes |" in md
        assert "| 00:00-00:05 | Dog runs | Wide shot |" in md
        assert md.endswith("## Technical Style Analysis\n\nDocumentary style.")

    def test_raw_fallback_is_verbatim(self):
        assert render_markdown(NO_MARKERS) == NO_MARKERS

    def test_uses_given_parse(self):
        parsed = parse_analysis(DOG_ANALYSIS)
        assert render_markdown("ignored", parsed) == render_markdown(DOG_ANALYSIS)

    def test_known_unstructured_reply_is_not_parsed_again(self, mocker):
        parse = mocker.patch("veoscope.services.render.parse_analysis")
        assert render_markdown(NO_MARKERS, None) == NO_MARKERS
        assert render_html(NO_MARKERS, None) == f'<pre class="raw">{NO_MARKERS}</pre>'
        parse.assert_not_called()


class TestRenderHtml:
    def test_structured_sections(self):
        html = render_html(DOG_ANALYSIS)
        assert "<h2>GLOBAL COHESION BLOCK</h2>" in html
        assert "<td>00:00-00:05</td><td>Dog runs</td><td>Wide shot</td>" in html
        assert "<th>Core Action &amp; Emotional Beat</th>" in html
        assert "Documentary style." in html

    def test_raw_fallback_is_escaped_pre(self):
        html = render_html("<b>no sections</b>")
        assert html == '<pre class="raw">&lt;b&gt;no sections&lt;/b&gt;</pre>'


class TestRenderState:
    def test_idle_is_empty(self):
        assert render_state_html(IdleState()) == ""

    def test_in_flight_shows_loader(self):
        state = InFlightState(filename="a.mp4", started_at=datetime.datetime.now(datetime.timezone.utc))
        html = render_state_html(state)
        assert "Analyzing your video..." in html
        assert "This may take a few minutes for longer videos." in html

    def test_failed_shows_message(self):
        state = FailedState(
            filename="a.txt",
            error=AnalysisFailure(error_code="validation_error", message="Invalid file type. Please upload a video file."),
        )
        assert 'class="error"' in render_state_html(state)
        assert "Invalid file type" in render_state_html(state)

    def test_succeeded_without_parse_shows_raw(self):
        state = SucceededState(
            filename="a.mp4",
            result=AnalysisSuccess(text=NO_MARKERS, model="m", mime_type="video/mp4"),
        )
        assert NO_MARKERS in render_state_html(state)
        assert "<table>" not in render_state_html(state)

    def test_succeeded_with_parse_shows_sections(self):
        state = SucceededState(
            filename="a.mp4",
            result=AnalysisSuccess(text=DOG_ANALYSIS, model="m", mime_type="video/mp4"),
            parsed=parse_analysis(DOG_ANALYSIS),
        )
        assert "<table>" in render_state_html(state)


class TestRenderPage:
    def test_form_enabled_when_idle(self):
        page = render_page(IdleState())
        assert '<form action="/analyze"' in page
        assert "Analyze Video</button>" in page
        assert "disabled" not in page

    def test_button_disabled_in_flight(self):
        state = InFlightState(filename="a.mp4", started_at=datetime.datetime.now(datetime.timezone.utc))
        page = render_page(state)
        assert '<button type="submit" disabled>Analyzing...</button>' in page
