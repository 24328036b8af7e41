import pytest
from pydantic import ValidationError

from techconnect.settings import Settings


def test_defaults_cover_all_clubs():
    cfg = Settings()
    assert cfg.club_namespaces == ("iet", "ieee", "acm", "ie", "iste")
    assert cfg.announcement_read_policy == "club"


def test_club_namespaces_from_csv(monkeypatch):
    monkeypatch.setenv("CLUB_NAMESPACES", "IET, acm ,")
    cfg = Settings()
    assert cfg.club_namespaces == ("iet", "acm")


def test_read_policy_is_validated(monkeypatch):
    monkeypatch.setenv("ANNOUNCEMENT_READ_POLICY", "Authenticated")
    assert Settings().announcement_read_policy == "authenticated"

    monkeypatch.setenv("ANNOUNCEMENT_READ_POLICY", "everyone")
    with pytest.raises(ValidationError):
        Settings()


def test_environment_helpers(monkeypatch):
    monkeypatch.setenv("ENV", "development")
    cfg = Settings()
    assert cfg.is_dev()
    assert not cfg.is_prod()


def test_production_refuses_development_secret(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError):
        Settings().ensure_production_ready()

    monkeypatch.setenv("SECRET_KEY", "a-real-secret")
    Settings().ensure_production_ready()


def test_development_allows_default_secret(monkeypatch):
    monkeypatch.setenv("ENV", "dev")
    monkeypatch.delenv("SECRET_KEY", raising=False)
    Settings().ensure_production_ready()
