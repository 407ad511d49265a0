"""Tests for the settings and the application."""

import logging

import pytest
from fastapi.testclient import TestClient

from fastpivot.app import FastPivot
from fastpivot.config import BaseSettings, Settings, get_settings, init_settings
from fastpivot.dependencies import register_service, unregister_service
from fastpivot.http import query_list
from fastpivot.logger import LogFormat, LogLevel, LogOutput, setup_logging

from tests.fakes import make_request


@pytest.fixture(autouse=True)
def cleanup():
    yield

    unregister_service(BaseSettings)


class TestSettings:
    def test_defaults(self):
        settings = BaseSettings()

        assert settings.title == "FastPivot"
        assert settings.relation_authorization is True
        assert settings.log_format == LogFormat.TEXT_LIGHT

    def test_values_come_from_the_environment(self, monkeypatch):
        monkeypatch.setenv("RELATION_AUTHORIZATION", "false")
        monkeypatch.setenv("LOG_FORMAT", "json")

        settings = BaseSettings()

        assert settings.relation_authorization is False
        assert settings.log_format == LogFormat.JSON

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TITLE=Blog\nLOG_LEVEL=DEBUG\n")

        settings = init_settings(str(env_file))

        assert settings.title == "Blog"
        assert settings.log_level == LogLevel.DEBUG
        assert get_settings() is settings

    def test_relative_log_file(self):
        settings = BaseSettings(log_file="var/app.log")

        assert settings.log_path.endswith("var/app.log")

    def test_absolute_log_file(self, tmp_path):
        path = str(tmp_path / "app.log")

        assert BaseSettings(log_file=path).log_path == path


class TestLogging:
    def test_file_output_requires_a_file(self):
        with pytest.raises(ValueError):
            setup_logging(output=LogOutput.FILE, log_file=None)

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "server.log"

        setup_logging(
            level=LogLevel.INFO,
            output=LogOutput.FILE,
            format=LogFormat.JSON,
            log_file=str(log_file),
        )
        logging.getLogger("fastpivot.test").info("Linked 2 tags")

        for handler in logging.getLogger().handlers:
            handler.flush()

        assert '"message": "Linked 2 tags"' in log_file.read_text()

        setup_logging()


class TestFastPivot:
    def test_app_uses_the_given_settings(self):
        settings = BaseSettings(title="Blog")
        app = FastPivot(settings=settings)

        assert app.title == "Blog"
        assert app.settings is settings

    def test_explicit_title_wins(self):
        app = FastPivot(settings=BaseSettings(), title="Admin")

        assert app.title == "Admin"


class TestSettingsInjection:
    def test_route_receives_the_registered_settings(self):
        settings = BaseSettings(title="Blog")
        register_service(settings, BaseSettings, force=True)

        app = FastPivot(settings=settings)

        @app.get("/title")
        async def title(current: Settings):
            return {"title": current.title}

        assert TestClient(app).get("/title").json() == {"title": "Blog"}


class TestQueryList:
    def test_delimited_and_repeated_values(self):
        request = make_request(b"include=author,%20tags&include=tags&include=")

        assert query_list(request, "include") == ["author", "tags"]

    def test_custom_delimiter(self):
        request = make_request(b"include=author;tags")

        assert query_list(request, "include", ";") == ["author", "tags"]

    def test_missing_param(self):
        assert query_list(make_request(), "include") == []
