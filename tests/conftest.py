import pytest

from waitingline.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Each test sees default settings unless it sets the environment itself."""
    monkeypatch.delenv("WAITINGLINE_CHECK_PRECONDITIONS", raising=False)
    monkeypatch.delenv("WAITINGLINE_LOG_LEVEL", raising=False)
    monkeypatch.setattr("waitingline.config.load_dotenv", lambda *a, **kw: False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
