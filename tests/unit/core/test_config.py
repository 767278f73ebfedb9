"""
Tests for settings loaded from the environment.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "APP_ENV", "LOG_LEVEL", "JSON_LOGS", "LEAVE_SCOPE_POLICY",
        "SKIP_MALFORMED_RECORDS", "CANDIDATE_SEARCH_FIELDS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        config = Settings(_env_file=None)
        assert config.app_name == "talentscope"
        assert config.app_env == "development"
        assert config.log_level == "INFO"
        assert config.json_logs is True
        assert config.leave_scope_policy == "designation"
        assert config.skip_malformed_records is True
        assert config.candidate_search_fields == ["name", "email", "phone", "skills"]

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("LEAVE_SCOPE_POLICY", "structural")
        clean_env.setenv("SKIP_MALFORMED_RECORDS", "false")
        clean_env.setenv("CANDIDATE_SEARCH_FIELDS", '["name", "skills"]')

        config = Settings(_env_file=None)
        assert config.leave_scope_policy == "structural"
        assert config.skip_malformed_records is False
        assert config.candidate_search_fields == ["name", "skills"]

    def test_env_names_case_insensitive(self, clean_env):
        clean_env.setenv("log_level", "DEBUG")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_policy_rejected(self, clean_env):
        clean_env.setenv("LEAVE_SCOPE_POLICY", "sideways")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_field_names_accepted(self, clean_env):
        assert Settings(_env_file=None, leave_scope_policy="structural").leave_scope_policy == "structural"

    def test_global_instance(self):
        assert isinstance(settings, Settings)
