import logging

import pytest

from selo_project.src.utils.logging_utils import KERNEL_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_kernel_logger():
    logger = logging.getLogger(KERNEL_LOGGER)
    level = logger.level
    yield
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


def test_setup_logging_console_only():
    logger = setup_logging("debug")
    assert logger.name == KERNEL_LOGGER
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_repeated_setup_replaces_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "selo.log"
    logger = setup_logging(logging.INFO, str(log_file))
    assert len(logger.handlers) == 2

    get_logger(f"{KERNEL_LOGGER}.core.geometry.buffer").info("buffered 3 polygons")
    for handler in logger.handlers:
        handler.flush()
    assert "buffered 3 polygons" in log_file.read_text()


def test_unknown_level_raises():
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_level_defaults_to_setting():
    from selo_project.src.services.settings_service import SettingsService

    SettingsService().set("log_level", "WARNING")
    assert setup_logging().level == logging.WARNING
