import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_bearer_token_masked(self):
        from admin_cache.config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "Bearer eyJhbGciOiJIUzI1NiJ9.abc"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "eyJhbGciOiJIUzI1NiJ9" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_phone_number_masked(self):
        from admin_cache.config.settings import mask_sensitive_data

        event_dict = {"event": "test", "phone": "0912345678"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "0912345678" not in result["phone"]
        assert "***MASKED***" in result["phone"]

    def test_password_masked(self):
        from admin_cache.config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from admin_cache.config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from admin_cache.config.settings import mask_sensitive_data

        event_dict = {"event": "brand.created", "path": "/brands/view/12", "entity_id": 12}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["path"] == "/brands/view/12"
        assert result["event"] == "brand.created"
        assert result["entity_id"] == 12


class TestConfigureLogging:
    @pytest.fixture()
    def restore_logging(self):
        import logging

        import structlog

        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        structlog.reset_defaults()

    def test_installs_json_formatter(self, restore_logging):
        import logging

        import structlog

        from admin_cache.config.settings import configure_logging

        configure_logging()

        formatters = [handler.formatter for handler in logging.getLogger().handlers]
        assert any(isinstance(f, structlog.stdlib.ProcessorFormatter) for f in formatters)
        assert structlog.is_configured()
