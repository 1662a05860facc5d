"""
Hackatime Doctor - Core Test Fixtures
Real project trees on disk, mocks only for subprocess and HTTP.
"""

import io
from pathlib import Path
from unittest.mock import Mock

import pytest

from hackatime_doctor.health.models import DoctorConfig
from hackatime_doctor.health.reporter import DoctorReporter
from hackatime_doctor.utils.console import Console
from hackatime_doctor.utils.logger import logger as doctor_logger

VALID_KEY = "ht_abcdefghijklmno"
API_URL = "https://hackatime.example.com/api/hackatime/v1"


@pytest.fixture(autouse=True)
def restore_doctor_logger():
    """Undo handler and level changes made by --verbose runs or logger tests."""
    handlers = doctor_logger.handlers[:]
    level = doctor_logger.level
    propagate = doctor_logger.propagate
    yield
    doctor_logger.handlers[:] = handlers
    doctor_logger.setLevel(level)
    doctor_logger.propagate = propagate


@pytest.fixture(autouse=True)
def clean_hackatime_environ(monkeypatch):
    """Keep the developer's own Hackatime variables out of the tests."""
    for name in [
        "HACKATIME_API_KEY",
        "HACKATIME_API_URL",
        "HACKATIME_DOCTOR_PROJECT_ROOT",
        "HACKATIME_DOCTOR_TOKEN_RULE",
        "HACKATIME_DOCTOR_TIMEOUT",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def valid_key() -> str:
    return VALID_KEY


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def write_env():
    """Write a .env file into a project directory."""
    def _write(root: Path, content: str) -> Path:
        env_file = root / ".env"
        env_file.write_text(content, encoding="utf-8")
        return env_file
    return _write


@pytest.fixture
def project_dir(tmp_path: Path, write_env) -> Path:
    """A fully scaffolded Node.js project with valid credentials."""
    (tmp_path / "package.json").write_text('{"name": "demo"}\n', encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "src").mkdir()
    (tmp_path / "README.md").write_text("# demo\n", encoding="utf-8")
    write_env(tmp_path, f"HACKATIME_API_KEY={VALID_KEY}\nHACKATIME_API_URL={API_URL}\n")
    return tmp_path


@pytest.fixture
def doctor_config(project_dir: Path) -> DoctorConfig:
    return DoctorConfig(project_root=project_dir)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> DoctorReporter:
    """Reporter writing into a buffer instead of the terminal."""
    return DoctorReporter(Console(file=output))


@pytest.fixture
def make_response():
    def _make(status_code: int) -> Mock:
        response = Mock()
        response.status_code = status_code
        return response
    return _make


@pytest.fixture
def http_session(make_response) -> Mock:
    """Session stub answering every POST with HTTP 200."""
    session = Mock()
    session.post.return_value = make_response(200)
    return session
