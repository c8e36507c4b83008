"""
Pytest configuration and fixtures for wired config tests.
"""

import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# Make the package importable without installing it
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))


NOTIFICATION_ROOT = """
[layout.params]
type = "NotificationBlock"
background_color = "#282828"
border_color = "#ebdbb2"
border_color_low = "#282828"
border_color_critical = "#fb4934"
border_color_paused = "#fabd2f"
gap = { x = 0.0, y = 8.0 }
"""

TEXT_ROOT = """
[layout.params]
type = "TextBlock"
text = "%s"
color = { r = 1.0, g = 1.0, b = 1.0, a = 1.0 }
"""


def make_config_text(
    max_notifications: int = 5,
    timeout: int = 10000,
    poll_interval: int = 16,
    root: str = NOTIFICATION_ROOT,
    extra: str = ""
) -> str:
    """Build a complete wired.toml document."""
    return f"""
max_notifications = {max_notifications}
min_window_width = 300
min_window_height = 60
timeout = {timeout}
poll_interval = {poll_interval}
debug = false
debug_color = {{ r = 0.0, g = 1.0, b = 0.0, a = 1.0 }}

[shortcuts]
notification_close = 1
notification_closeall = 3
notification_pause = 99
notification_url = 2

[layout]
name = "root"
offset = {{ x = 7.0, y = 7.0 }}
{root}
[[layout.children]]
name = "summary"
hook = {{ parent_anchor = "TL", self_anchor = "TL" }}

[layout.children.params]
type = "TextBlock"
text = "%s"
color = "#ebdbb2"
{extra}"""


@pytest.fixture
def config_text() -> Callable[..., str]:
    """Factory for config documents."""
    return make_config_text


@pytest.fixture
def write_config(tmp_path) -> Callable[..., Path]:
    """Write a config document and return its path."""

    def _write(text: str, relative: str = "wired/wired.toml") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_home(tmp_path) -> Path:
    """Empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def home_environ(fake_home) -> Dict[str, str]:
    """Environment with only HOME set."""
    return {"HOME": str(fake_home)}


@pytest.fixture
def text_root() -> str:
    """Layout root section that is not a NotificationBlock."""
    return TEXT_ROOT
