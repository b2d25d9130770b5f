import logging

from mfetch.util import log


def flush(logger: logging.Logger):
    for handler in logger.handlers:
        handler.flush()


def test_configure_writes_to_logfile(tmp_path):
    logfile = tmp_path / "test.log"
    logger = log.configure(debug=True, logfile=logfile, name="mfetch-test-log")
    assert logger.level == logging.DEBUG
    assert not logger.propagate

    logger.warning("something odd")
    flush(logger)

    content = logfile.read_text(encoding="utf-8")
    assert "[WARNING] mfetch-test-log.test_configure_writes_to_logfile - something odd" in content


def test_module_loggers_keep_their_name(tmp_path):
    logfile = tmp_path / "test.log"
    logger = log.configure(debug=False, logfile=logfile, name="mfetch-test-child")
    logging.getLogger("mfetch-test-child.util.dmi").info("parsed")
    logging.getLogger("mfetch-test-child.util.dmi").debug("hidden")
    flush(logger)

    content = logfile.read_text(encoding="utf-8")
    assert "[INFO]    mfetch-test-child.util.dmi.test_module_loggers_keep_their_name - parsed" in content
    assert "hidden" not in content


def test_configure_does_not_add_handlers_twice(tmp_path):
    logfile = tmp_path / "test.log"
    log.configure(debug=False, logfile=logfile, name="mfetch-test-twice")
    logger = log.configure(debug=True, logfile=logfile, name="mfetch-test-twice")
    handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    assert handlers[0].level == logging.DEBUG


def test_level_pad_formatter():
    formatter = log.LevelPadFormatter("%(padded)s%(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    assert formatter.format(record) == "[INFO]   hello"
