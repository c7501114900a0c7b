from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


_ENV_EXAMPLE = Path(__file__).resolve().parents[3] / '.env.example'


@pytest.mark.unit
class TestCorsOriginsSetting:
    def test_env_example_loads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        settings = Settings(_env_file=str(_ENV_EXAMPLE))  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']

    def test_comma_separated_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://a.test, http://b.test,')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_json_list_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://a.test", "http://b.test"]')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_unset_means_no_origins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == []
