import pytest

from nook_sitemap.logger import console_to, get_logger, set_log_level


@pytest.fixture(autouse=True)
def _info_level():
    set_log_level("INFO")
    yield
    set_log_level("INFO")


def test_module_logger_reaches_console(capsys):
    get_logger("nook_sitemap.test").info("hello")
    assert "[INFO] hello" in capsys.readouterr().out


def test_console_to_stderr_is_temporary(capsys):
    log = get_logger("nook_sitemap.test")
    with console_to("stderr"):
        log.info("inside")
    log.info("outside")
    captured = capsys.readouterr()
    assert "[INFO] inside" in captured.err
    assert "inside" not in captured.out
    assert "[INFO] outside" in captured.out


def test_console_to_unknown_target():
    with pytest.raises(ValueError):
        with console_to("syslog"):
            pass


def test_set_log_level_filters(capsys):
    set_log_level("WARNING")
    get_logger("nook_sitemap.test").info("quiet")
    assert "quiet" not in capsys.readouterr().out
