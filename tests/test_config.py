"""
Unit tests for settings loading and the required environment check.
"""

import itertools

import pytest

from planner_integration.config import REQUIRED_ENV_VARS, Settings

ALL_REQUIRED = list(REQUIRED_ENV_VARS.values())


def _subsets(items):
    for size in range(len(items) + 1):
        yield from itertools.combinations(items, size)


class TestMissingRequiredEnv:
    """Tests for Settings.missing_required_env."""

    @pytest.mark.parametrize("present", list(_subsets(ALL_REQUIRED)))
    def test_reports_every_missing_variable(self, monkeypatch, present):
        """Each unset variable is reported, in declaration order."""
        for name in present:
            monkeypatch.setenv(name, f"value-for-{name}")

        settings = Settings(_env_file=None)

        assert settings.missing_required_env() == [n for n in ALL_REQUIRED if n not in present]

    def test_blank_values_count_as_missing(self):
        """Whitespace-only credentials are treated as unset."""
        settings = Settings(_env_file=None, client_id="  ", client_secret="s", tenant_id="")

        assert settings.missing_required_env() == ["MICROSOFT_CLIENT_ID", "MICROSOFT_TENANT_ID"]

    def test_loading_never_fails_without_credentials(self):
        """Settings load even when nothing is configured."""
        settings = Settings(_env_file=None)

        assert settings.client_id is None
        assert settings.missing_required_env() == ALL_REQUIRED


class TestSettingsValues:
    """Tests for defaults and environment mapping."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.host == "0.0.0.0"
        assert settings.graph_base_url == "https://graph.microsoft.com/v1.0"
        assert settings.graph_scope == "https://graph.microsoft.com/.default"

    def test_reads_microsoft_variables_and_port(self, monkeypatch):
        """MICROSOFT_* and PORT map onto the settings fields."""
        monkeypatch.setenv("MICROSOFT_CLIENT_ID", "abc")
        monkeypatch.setenv("MICROSOFT_TENANT_ID", "contoso")
        monkeypatch.setenv("PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.client_id == "abc"
        assert settings.tenant_id == "contoso"
        assert settings.port == 8080

    def test_authority_includes_tenant(self):
        settings = Settings(
            _env_file=None,
            tenant_id="contoso",
            authority_host="https://login.microsoftonline.com/",
        )

        assert settings.authority == "https://login.microsoftonline.com/contoso"
