import logging

import pytest

from groupsim import logging_config


@pytest.fixture
def clean_root(monkeypatch):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(logging_config, "_LOGGING_CONFIGURED", False)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_file_once(clean_root, tmp_path):
    log_file = tmp_path / "logs" / "groupsim.log"
    before = len(clean_root.handlers)

    logging_config.setup_logging("DEBUG", log_file=log_file)
    logging_config.setup_logging("DEBUG", log_file=log_file)
    assert len(clean_root.handlers) == before + 2
    assert clean_root.level == logging.DEBUG

    logging.getLogger("groupsim.test").info("hello")
    for handler in clean_root.handlers:
        handler.flush()
    assert "groupsim.test" in log_file.read_text(encoding="utf-8")
    assert "INFO - hello" in log_file.read_text(encoding="utf-8")
