"""Unit tests for settings validation."""

from fitcrm.config.settings import Settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestValidateRequiredFields:
    """Tests for Settings.validate_required_fields."""

    def test_defaults_are_complete(self):
        assert make_settings().validate_required_fields() == []

    def test_unknown_backend(self):
        missing = make_settings(storage_backend="floppy").validate_required_fields()
        assert len(missing) == 1
        assert missing[0].startswith("STORAGE_BACKEND")

    def test_r2_needs_credentials(self):
        missing = make_settings(storage_backend="r2").validate_required_fields()
        assert missing == ["R2_ACCOUNT_ID", "R2_ACCESS_KEY_ID", "R2_SECRET_ACCESS_KEY"]

    def test_r2_endpoint_replaces_account_id(self):
        settings = make_settings(
            storage_backend="r2",
            r2_endpoint_url="http://localhost:9000",
            r2_access_key_id="key",
            r2_secret_access_key="secret",
        )
        assert settings.validate_required_fields() == []
        assert settings.r2_endpoint == "http://localhost:9000"

    def test_catalog_url_not_needed_in_mock_mode(self):
        assert make_settings(catalog_base_url="").validate_required_fields() == ["CATALOG_BASE_URL"]
        assert make_settings(catalog_base_url="", catalog_mock_mode=True).validate_required_fields() == []


def test_r2_endpoint_from_account_id():
    settings = make_settings(r2_account_id="abc123")
    assert settings.r2_endpoint == "https://abc123.r2.cloudflarestorage.com"


def test_cors_origins_list():
    assert make_settings(cors_origins="http://a.test, http://b.test,").cors_origins_list == [
        "http://a.test",
        "http://b.test",
    ]
    assert make_settings(cors_origins="*").cors_origins_list == ["*"]
