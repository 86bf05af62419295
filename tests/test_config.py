"""Tests for environment-driven configuration helpers."""

from safe_wallet import config


class TestGetEnv:

    def test_get_env_default(self, monkeypatch):
        monkeypatch.delenv("SAFE_WALLET_TEST_VAR", raising=False)
        assert config.get_env("SAFE_WALLET_TEST_VAR") is None
        assert config.get_env("SAFE_WALLET_TEST_VAR", "fallback") == "fallback"

    def test_get_env_set(self, monkeypatch):
        monkeypatch.setenv("SAFE_WALLET_TEST_VAR", "custom.dat")
        assert config.get_env("SAFE_WALLET_TEST_VAR", "wallet.dat") == "custom.dat"


class TestDefaults:

    def test_no_kdf_setting(self):
        assert not hasattr(config, "KDF_ITERATIONS")
