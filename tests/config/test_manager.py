# tests/config/test_manager.py
"""
Tests for ConfigManager.

Tests cover:
- Copy semantics of section accessors
- Round-robin upstream selection (sequential and concurrent)
- new_manager() startup path
- display_config() output
"""

import logging
import os
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from relaycore.config.manager import ConfigManager, new_manager
from relaycore.config.models import AppConfig, AuthConfig, KeysConfig, UpstreamConfig
from relaycore.exceptions import ConfigValidationError

URLS = ["https://a.example", "https://b.example", "https://c.example"]


def _manager(base_urls=None, **sections) -> ConfigManager:
    if base_urls is not None:
        sections["upstream"] = UpstreamConfig(base_urls=base_urls)
    return ConfigManager(AppConfig(**sections))


# =============================================================================
# ACCESSORS
# =============================================================================


class TestAccessors:

    def test_sections_match_snapshot(self):
        config = AppConfig(keys=KeysConfig(api_keys=["sk-1"], max_retries=5))
        manager = ConfigManager(config)

        assert manager.get_server_config() == config.server
        assert manager.get_keys_config() == config.keys
        assert manager.get_auth_config() == config.auth
        assert manager.get_cors_config() == config.cors
        assert manager.get_performance_config() == config.performance
        assert manager.get_log_config() == config.log

    def test_accessors_return_copies(self):
        manager = _manager(keys=KeysConfig(api_keys=["sk-1"]))

        keys = manager.get_keys_config()
        keys.api_keys.append("sk-injected")
        cors = manager.get_cors_config()
        cors.allowed_origins.clear()

        assert manager.get_keys_config().api_keys == ["sk-1"]
        assert manager.get_cors_config().allowed_origins == ["*"]

    def test_upstream_list_copy(self):
        manager = _manager(base_urls=list(URLS))
        manager.get_upstream_config().base_urls.append("https://evil.example")
        assert manager.get_upstream_config().base_urls == URLS

    def test_config_property_is_copy(self):
        manager = _manager(keys=KeysConfig(api_keys=["sk-1"]))
        manager.config.keys.api_keys.append("sk-2")
        assert manager.config.keys.api_keys == ["sk-1"]

    def test_auth_enabled_derived(self):
        assert _manager(auth=AuthConfig(key="secret")).get_auth_config().enabled is True
        assert _manager().get_auth_config().enabled is False


# =============================================================================
# ROUND ROBIN
# =============================================================================


class TestRoundRobin:

    def test_sequential_cycle(self):
        manager = _manager(base_urls=URLS)
        selected = [manager.get_upstream_config().base_url for _ in range(9)]
        assert selected == URLS * 3

    def test_starts_from_first_entry(self):
        manager = _manager(base_urls=URLS)
        assert manager.get_upstream_config().base_url == URLS[0]

    def test_single_entry_never_advances_cursor(self):
        manager = _manager(base_urls=["https://only.example"])
        with patch.object(manager, "_next_index", wraps=manager._next_index) as next_index:
            for _ in range(10):
                assert manager.get_upstream_config().base_url == "https://only.example"
            next_index.assert_not_called()

    def test_selection_does_not_leak_into_snapshot(self):
        manager = _manager(base_urls=URLS)
        manager.get_upstream_config()
        assert manager.config.upstream.base_url == ""

    def test_independent_cursor_per_manager(self):
        first = _manager(base_urls=URLS)
        second = _manager(base_urls=URLS)
        first.get_upstream_config()
        assert second.get_upstream_config().base_url == URLS[0]

    @pytest.mark.parametrize("workers", [4, 16])
    def test_concurrent_distribution(self, workers):
        """N callers making 3N calls in total see each URL exactly N times."""
        manager = _manager(base_urls=URLS)
        calls_per_worker = 3 * 50
        barrier = threading.Barrier(workers)

        def worker():
            barrier.wait()
            return [manager.get_upstream_config().base_url for _ in range(calls_per_worker)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = [f.result() for f in [pool.submit(worker) for _ in range(workers)]]

        counts = Counter(url for batch in results for url in batch)
        expected = workers * calls_per_worker // len(URLS)
        assert counts == {url: expected for url in URLS}

    def test_concurrent_indices_are_unique(self):
        manager = _manager(base_urls=URLS)
        workers = 8
        barrier = threading.Barrier(workers)

        def worker():
            barrier.wait()
            return [manager._next_index() for _ in range(300)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            indices = [i for f in [pool.submit(worker) for _ in range(workers)] for i in f.result()]

        assert sorted(indices) == list(range(workers * 300))


# =============================================================================
# new_manager()
# =============================================================================


class TestNewManager:

    def test_builds_from_mapping(self, tmp_path):
        env = {"PORT": "8080", "OPENAI_BASE_URL": "https://a.example,https://b.example"}
        manager = new_manager(env_file=tmp_path / "missing.env", environ=env)

        assert manager.get_server_config().port == 8080
        assert manager.get_upstream_config().base_url == "https://a.example"
        assert manager.get_upstream_config().base_url == "https://b.example"

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PORT=9100\nAUTH_KEY=from-file\n")

        with patch.dict(os.environ, {"AUTH_KEY": "from-env"}):
            os.environ.pop("PORT", None)
            manager = new_manager(env_file=env_file)

            assert manager.get_server_config().port == 9100
            assert manager.get_auth_config().key == "from-env"

    def test_invalid_environment_raises(self):
        env = {"PORT": "0", "START_INDEX": "-3", "MAX_CONCURRENT_REQUESTS": "0"}
        with pytest.raises(ConfigValidationError) as exc_info:
            new_manager(env_file=None, environ=env)
        assert len(exc_info.value.violations) == 3

    def test_validate_on_valid_manager(self):
        _manager(keys=KeysConfig(api_keys=["k"])).validate()


class TestDisplayConfig:

    def test_logs_summary_without_secrets(self, caplog):
        manager = _manager(
            base_urls=URLS,
            keys=KeysConfig(api_keys=["sk-secret-1", "sk-secret-2"]),
            auth=AuthConfig(key="top-secret"),
        )
        with caplog.at_level(logging.INFO, logger="relaycore.config.manager"):
            manager.display_config()

        text = "\n".join(r.getMessage() for r in caplog.records)
        assert "API Keys loaded: 2" in text
        assert "Upstream URLs: " + ", ".join(URLS) in text
        assert "Authentication: enabled" in text
        assert "sk-secret" not in text
        assert "top-secret" not in text
