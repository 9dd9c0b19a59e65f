import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from veoscope.config import get_settings


# --- Canned model replies ---

DOG_ANALYSIS = (
    "GLOBAL COHESION BLOCK\n"
    "Characters: a dog\n"
    "DETAILED SCENE BREAKDOWN TABLE\n"
    "| A | B | C |\n"
    "|---|---|---|\n"
    "| 00:00-00:05 | Dog runs | Wide shot |\n"
    "TECHNICAL STYLE ANALYSIS\n"
    "Documentary style."
)

FULL_ANALYSIS = """Here is the breakdown you asked for.

1. GLOBAL COHESION BLOCK
   - MAIN CHARACTERS:
     * Hawk: juvenile red-tailed hawk, brown and cream plumage, wary.
     * Rescuer: woman in green field jacket, calm and focused.
   - VEHICLES:
     * White rescue van with a blue stripe.

2. DETAILED SCENE BREAKDOWN TABLE
| Timestamp Range (Start - End) | Core Action & Emotional Beat | Visual, Technical & Sound Notes |
|---|---|---|
| 00:00-00:15 | The rescuer spots the hawk by the road. | Wide drone shot, slow push-in, wind noise. |
| 00:15-00:40 | She wraps the hawk in a towel. | Handheld close-up, soft daylight, gentle music. |
| 00:40-01:05 | The van drives to the clinic. | Tracking shot, warm tones, engine hum. |

3. TECHNICAL STYLE ANALYSIS
   - OVERALL STYLE:
     * Cinematic rescue documentary with steady pacing.
   - SOUND DESIGN / SOUNDSCAPE:
     * Diegetic wind and engine layered under a soft piano score.
"""

NO_MARKERS = "Sorry, I could not watch this video. Please try a different file."

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"


@pytest.fixture
def gemini_settings(monkeypatch):
    """Settings with a Gemini API key configured."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("API_KEY", raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def mock_genai_client_cls(mocker):
    return mocker.patch("veoscope.services.gemini.genai.Client")


@pytest.fixture
def mock_genai_client(gemini_settings, mock_genai_client_cls):
    """Fully mocked genai.Client whose generate_content returns FULL_ANALYSIS."""
    client = MagicMock()
    client.models.generate_content.return_value = MagicMock(text=FULL_ANALYSIS)
    mock_genai_client_cls.return_value = client
    return client


@pytest.fixture(autouse=True)
def fresh_session(monkeypatch):
    monkeypatch.setattr("veoscope.session._session", None)


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from veoscope.main import api
    return TestClient(api)
