import sys

import run_tests
from run_tests import TestRunner, build_parser
from testsuites.ui_testing.framework.config import TestConfig


def _runner(**kwargs):
    return TestRunner(config=TestConfig({"allure.results.directory": "out/allure"}), **kwargs)


def test_default_ui_command():
    cmd = _runner().build_pytest_command()

    assert cmd[:4] == [sys.executable, "-m", "pytest", "testsuites/ui_testing/tests"]
    assert "--alluredir" in cmd
    assert cmd[cmd.index("--alluredir") + 1].endswith("out/allure")
    assert "--cucumberjson" in cmd
    assert cmd[cmd.index("--cucumberjson") + 1].endswith("cucumber.json")
    assert cmd[-1] == "-q"
    assert "-n" not in cmd


def test_tags_parallel_and_verbosity():
    cmd = _runner(tags=["smoke", "P0"], parallel=4, verbose=True, allure_report=False).build_pytest_command()

    # cmd[1] is the "-m" of "python -m pytest"
    options = cmd[4:]
    assert options[options.index("-m") + 1] == "smoke or P0"
    assert cmd[cmd.index("-n") + 1] == "4"
    assert "--alluredir" not in cmd
    assert cmd[-1] == "-v"


def test_unit_suite_has_no_report_options():
    cmd = _runner(suite="unit").build_pytest_command()
    assert "testsuites/unit" in cmd
    assert "--cucumberjson" not in cmd


def test_browser_choice_is_exported_as_override(monkeypatch):
    monkeypatch.delenv("UI_BROWSER", raising=False)
    monkeypatch.delenv("UI_HEADLESS", raising=False)

    env = _runner(browser="firefox", headless=False).build_environment()
    assert env["UI_BROWSER"] == "firefox"
    assert env["UI_HEADLESS"] == "false"

    env = _runner().build_environment()
    assert "UI_BROWSER" not in env
    assert "UI_HEADLESS" not in env


def test_cli_parsing():
    args = build_parser().parse_args(["--browser", "safari", "--headed", "--tags", "login", "-n", "2"])
    assert args.browser == "safari"
    assert args.headed is True
    assert args.tags == ["login"]
    assert args.parallel == 2
    assert args.no_allure is False


def test_main_runs_configured_runner(monkeypatch):
    seen = {}

    def fake_run(self):
        seen["runner"] = self
        return 3

    monkeypatch.setattr(run_tests, "init_logger", lambda **kwargs: None)
    monkeypatch.setattr(TestRunner, "run", fake_run)

    assert run_tests.main(["--browser", "edge", "--headed", "--no-allure"]) == 3
    runner = seen["runner"]
    assert runner.browser == "edge"
    assert runner.headless is False
    assert runner.allure_report is False
