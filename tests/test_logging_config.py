import logging

from retroboy_backup.logging_config import LOG_FILENAME, get_logger, setup_logging


def test_setup_logging_writes_to_file(tmp_path, app_logger):
    logger = setup_logging(log_dir=tmp_path)

    assert logger is app_logger
    assert logger.level == logging.DEBUG
    assert [type(h) for h in logger.handlers] == [logging.FileHandler]

    get_logger("reconciliation").info("reconciled backup")
    logger.handlers[0].flush()

    contents = (tmp_path / LOG_FILENAME).read_text(encoding="utf-8")
    assert "retroboy_backup.reconciliation - INFO - reconciled backup" in contents


def test_debug_adds_console_handler(tmp_path, app_logger):
    logger = setup_logging(debug=True, log_dir=tmp_path)

    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[1], logging.StreamHandler)


def test_setup_logging_replaces_previous_handlers(tmp_path, app_logger):
    setup_logging(debug=True, log_dir=tmp_path)
    logger = setup_logging(log_dir=tmp_path)

    assert len(logger.handlers) == 1


def test_get_logger_is_child_of_application_logger():
    assert get_logger("backup_service").name == "retroboy_backup.backup_service"
