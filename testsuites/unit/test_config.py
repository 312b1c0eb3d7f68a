import yaml

from testsuites.ui_testing.framework.config import (
    DEFAULTS,
    TestConfig,
    env_key,
    get_test_config,
    reset_test_config,
)


def _clear_ui_env(monkeypatch):
    for key in DEFAULTS:
        monkeypatch.delenv(env_key(key), raising=False)
    monkeypatch.delenv("UI_CONFIG_FILE", raising=False)


def test_defaults_when_nothing_configured():
    config = TestConfig()
    assert config.browser == "chrome"
    assert config.implicit_wait == 10
    assert config.explicit_wait == 10
    assert config.page_load_timeout == 30
    assert config.script_timeout == 30
    assert config.base_url == "https://www.google.com"
    assert config.headless is False
    assert config.window_size == "1920x1080"
    assert config.screenshot_on_failure is True
    assert config.video_recording is False
    assert config.thread_count == 1
    assert config.retry_count == 0
    assert config.allure_results_directory == "target/allure-results"
    assert config.screenshots_directory == "target/screenshots"


def test_malformed_integer_falls_back_to_default():
    config = TestConfig({"implicit.wait": "abc", "thread.count": "4"})
    assert config.implicit_wait == 10
    assert config.get_int("implicit.wait", 7) == 7
    assert config.thread_count == 4


def test_fractional_timeouts_are_kept(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("explicit.wait: 2.5\nimplicit.wait: 0.75\n", encoding="utf-8")

    config = TestConfig.load(config_path)
    assert config.explicit_wait == 2.5
    assert config.implicit_wait == 0.75
    assert config.page_load_timeout == 30


def test_boolean_parsing():
    config = TestConfig({"headless": "TRUE", "video.recording": "no", "screenshot.on.failure": "maybe"})
    assert config.headless is True
    assert config.video_recording is False
    assert config.screenshot_on_failure is True


def test_missing_key_returns_caller_default():
    config = TestConfig()
    assert config.get("does.not.exist") is None
    assert config.get_str("does.not.exist", "fallback") == "fallback"
    assert "does.not.exist" not in config
    assert "browser" in config


def test_window_dimensions():
    assert TestConfig({"window.size": "1280X720"}).window_dimensions == (1280, 720)
    assert TestConfig({"window.size": "wide"}).window_dimensions == (1920, 1080)


def test_load_flat_yaml(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"browser": "firefox", "page.load.timeout": 45, "headless": True}),
        encoding="utf-8",
    )

    config = TestConfig.load(config_path)
    assert config.browser == "firefox"
    assert config.page_load_timeout == 45
    assert config.headless is True
    assert config.explicit_wait == 10
    assert config.source == config_path


def test_load_nested_yaml_sections(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"page": {"load": {"timeout": 12}}, "logging": {"level": "DEBUG"}}),
        encoding="utf-8",
    )

    config = TestConfig.load(config_path)
    assert config.page_load_timeout == 12
    assert config.get_str("logging.level") == "DEBUG"


def test_missing_file_uses_defaults(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config = TestConfig.load(tmp_path / "nope.yaml")
    assert config.browser == "chrome"
    assert config.implicit_wait == 10


def test_invalid_yaml_uses_defaults(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("browser: [firefox\n", encoding="utf-8")
    assert TestConfig.load(config_path).browser == "chrome"

    config_path.write_text("- just\n- a list\n", encoding="utf-8")
    assert TestConfig.load(config_path).browser == "chrome"


def test_environment_overrides_file(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"browser": "firefox", "headless": False}), encoding="utf-8")

    monkeypatch.setenv("UI_BROWSER", "edge")
    monkeypatch.setenv("UI_HEADLESS", "true")
    monkeypatch.setenv("UI_PAGE_LOAD_TIMEOUT", "60")

    config = TestConfig.load(config_path)
    assert config.browser == "edge"
    assert config.headless is True
    assert config.page_load_timeout == 60

    assert TestConfig.load(config_path, apply_env=False).browser == "firefox"


def test_config_file_from_environment(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "custom.yaml"
    config_path.write_text(yaml.dump({"base.url": "http://app.test"}), encoding="utf-8")
    monkeypatch.setenv("UI_CONFIG_FILE", str(config_path))

    assert TestConfig.load().base_url == "http://app.test"


def test_process_wide_config_is_cached(monkeypatch, tmp_path):
    _clear_ui_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"browser": "safari"}), encoding="utf-8")
    monkeypatch.setenv("UI_CONFIG_FILE", str(config_path))

    reset_test_config()
    try:
        first = get_test_config()
        assert first.browser == "safari"
        assert get_test_config() is first

        reset_test_config()
        assert get_test_config() is not first
    finally:
        reset_test_config()


def test_env_key_naming():
    assert env_key("page.load.timeout") == "UI_PAGE_LOAD_TIMEOUT"
    assert env_key("browser") == "UI_BROWSER"
