"""
Config file search order tests.
"""

from pathlib import Path

from wired.config.locator import ConfigLocator, find_config


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def make_locator(environ, system_dir: Path) -> ConfigLocator:
    return ConfigLocator(environ=environ, default_config_dirs=(str(system_dir),))


class TestSearchOrder:
    """First existing path in the fixed order wins."""

    def test_xdg_config_home_override_wins(self, tmp_path, fake_home):
        xdg_home = tmp_path / "xdg"
        override = touch(xdg_home / "wired" / "wired.toml")
        touch(fake_home / ".config" / "wired" / "wired.toml")
        touch(fake_home / ".wired.toml")

        environ = {"HOME": str(fake_home), "XDG_CONFIG_HOME": str(xdg_home)}
        locator = make_locator(environ, tmp_path / "etc")

        assert locator.find_config() == override

    def test_xdg_config_dirs_searched_after_home(self, tmp_path, fake_home):
        system = tmp_path / "sysconf"
        expected = touch(system / "wired" / "wired.toml")

        environ = {"HOME": str(fake_home), "XDG_CONFIG_DIRS": f"relative/dir:{system}"}
        locator = make_locator(environ, tmp_path / "etc")

        assert locator.find_config() == expected

    def test_home_fallback_when_override_points_elsewhere(self, tmp_path, fake_home):
        default = touch(fake_home / ".config" / "wired" / "wired.toml")

        environ = {"HOME": str(fake_home), "XDG_CONFIG_HOME": str(tmp_path / "empty")}
        locator = make_locator(environ, tmp_path / "etc")

        assert locator.find_config() == default

    def test_system_default_dir(self, tmp_path, fake_home):
        etc = tmp_path / "etc"
        expected = touch(etc / "wired" / "wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, etc)

        assert locator.find_config() == expected

    def test_unprefixed_config_home_file(self, tmp_path, fake_home):
        expected = touch(fake_home / ".config" / "wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, tmp_path / "etc")

        assert locator.find_config() == expected

    def test_unprefixed_file_honors_overrides(self, tmp_path, fake_home):
        system = tmp_path / "sysconf"
        expected = touch(system / "wired.toml")

        environ = {"HOME": str(fake_home), "XDG_CONFIG_DIRS": str(system)}
        locator = make_locator(environ, tmp_path / "etc")

        assert locator.find_config() == expected

    def test_prefixed_beats_unprefixed(self, tmp_path, fake_home):
        etc = tmp_path / "etc"
        expected = touch(etc / "wired" / "wired.toml")
        touch(fake_home / ".config" / "wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, etc)

        assert locator.find_config() == expected

    def test_unprefixed_beats_dotfile(self, tmp_path, fake_home):
        expected = touch(fake_home / ".config" / "wired.toml")
        touch(fake_home / ".wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, tmp_path / "etc")

        assert locator.find_config() == expected

    def test_home_dotfile_is_last_resort(self, tmp_path, fake_home):
        dotfile = touch(fake_home / ".wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, tmp_path / "etc")

        assert locator.find_config() == dotfile

    def test_home_config_beats_dotfile(self, tmp_path, fake_home):
        expected = touch(fake_home / ".config" / "wired" / "wired.toml")
        touch(fake_home / ".wired.toml")

        locator = make_locator({"HOME": str(fake_home)}, tmp_path / "etc")

        assert locator.find_config() == expected

    def test_directories_are_not_configs(self, tmp_path, fake_home):
        (fake_home / ".config" / "wired" / "wired.toml").mkdir(parents=True)

        locator = make_locator({"HOME": str(fake_home)}, tmp_path / "etc")

        assert locator.find_config() is None


class TestNotFound:
    def test_none_when_nothing_exists(self, tmp_path, home_environ):
        locator = make_locator(home_environ, tmp_path / "etc")

        assert locator.find_config() is None

    def test_none_without_home(self, tmp_path):
        locator = make_locator({}, tmp_path / "etc")

        assert locator.find_config() is None

    def test_find_config_function(self, fake_home):
        dotfile = touch(fake_home / ".wired.toml")

        assert find_config({"HOME": str(fake_home)}) == dotfile


class TestCandidates:
    def test_order_without_duplicates(self, tmp_path, fake_home):
        etc = tmp_path / "etc"
        locator = make_locator({"HOME": str(fake_home)}, etc)

        assert locator.candidates() == [
            fake_home / ".config" / "wired" / "wired.toml",
            etc / "wired" / "wired.toml",
            fake_home / ".config" / "wired.toml",
            etc / "wired.toml",
            fake_home / ".wired.toml",
        ]

    def test_empty_without_any_base_directory(self):
        locator = ConfigLocator(environ={}, default_config_dirs=())

        assert locator.candidates() == []
