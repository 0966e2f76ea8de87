import logging

from hookdl.common import log_server_message, setup_logging


def test_setup_logging_creates_log_dir(tmp_path):
    log_dir = tmp_path / "logs"

    setup_logging(str(log_dir))

    assert log_dir.is_dir()


def test_log_server_message_prefix(caplog):
    log = logging.getLogger("tests.server")

    with caplog.at_level(logging.INFO, logger="tests.server"):
        log_server_message("Server stopped", log)

    assert caplog.records[0].getMessage() == "[SERVER] Server stopped"
