"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

from devsite.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.posts_dir == Path("posts")
            assert s.debug is False
            assert s.app_title == "devsite"
            assert s.chess_enabled is True
            assert s.lichess_api_key == ""
            assert s.lichess_api_url == "https://lichess.org/api/account"
            assert s.port == 8080

    def test_from_env(self):
        env = {
            "DEVSITE_POSTS_DIR": "/tmp/posts",
            "DEVSITE_DEBUG": "true",
            "DEVSITE_APP_TITLE": "My Site",
            "DEVSITE_CHESS_ENABLED": "false",
            "DEVSITE_LICHESS_TIMEOUT": "2.5",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.posts_dir == Path("/tmp/posts")
            assert s.debug is True
            assert s.app_title == "My Site"
            assert s.chess_enabled is False
            assert s.lichess_timeout == 2.5

    def test_lichess_key_without_prefix(self):
        with patch.dict("os.environ", {"LICHESS_API_KEY": "lip_abc"}, clear=True):
            s = Settings(_env_file=None)
            assert s.lichess_api_key == "lip_abc"

    def test_lichess_key_with_prefix(self):
        with patch.dict(
            "os.environ", {"DEVSITE_LICHESS_API_KEY": "lip_xyz"}, clear=True
        ):
            s = Settings(_env_file=None)
            assert s.lichess_api_key == "lip_xyz"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LICHESS_API_KEY=from_file\nDEVSITE_PORT=9000\n")
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=env_file)
            assert s.lichess_api_key == "from_file"
            assert s.port == 9000


class TestEntryPoint:
    def test_main_runs_uvicorn_with_settings(self):
        import devsite.__main__ as entry

        with patch.object(entry.uvicorn, "run") as run:
            entry.main()

        run.assert_called_once_with(
            "devsite.main:app",
            host=entry.settings.host,
            port=entry.settings.port,
            reload=entry.settings.debug,
            log_level=entry.settings.log_level.lower(),
        )
