from autotest_tools.common import ensure_directory, init_logger


def test_ensure_directory(tmp_path):
    target = tmp_path / "a" / "b"
    assert ensure_directory(str(target)) == str(target)
    assert target.is_dir()
    ensure_directory(str(target))


def test_init_logger_creates_log_directory(tmp_path):
    log_file = tmp_path / "logs" / "ui.log"
    try:
        init_logger(level="debug", log_file=str(log_file), force=True)
        assert log_file.parent.is_dir()
    finally:
        init_logger(force=True)
