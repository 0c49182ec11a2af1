import logging

from app.core import logging_config


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    logging_config.configure_logging("DEBUG")
    logging_config.configure_logging("INFO")
    ours = [h for h in root.handlers if h is logging_config._handler]
    assert len(ours) == 1
    assert root.level == logging.INFO
