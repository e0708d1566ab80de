"""
Unit tests for config.logging_config.
"""

import logging
import logging.handlers
import uuid
from pathlib import Path

from config.logging_config import get_logger, setup_logger
from config.settings import get_settings


def _handlers_up_to_root(logger: logging.Logger):
    handlers = []
    while logger is not None and logger is not logging.getLogger():
        handlers.extend(logger.handlers)
        if not logger.propagate:
            break
        logger = logger.parent
    return handlers


def _file_handlers(handlers):
    return [h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


class TestLoggerHierarchy:

    def test_module_loggers_are_children(self):
        assert get_logger("leadgen.pipeline.generation_pipeline").name == "leadgen.pipeline.generation_pipeline"
        assert get_logger("api.wizard_router").name == "leadgen.api.wizard_router"
        assert get_logger().name == "leadgen"

    def test_module_loggers_have_no_handlers(self):
        for name in ("leadgen.pipeline.generation_pipeline", "ai_providers.manager", "config.settings"):
            assert get_logger(name).handlers == []

    def test_one_console_and_one_file_handler_per_record(self):
        handlers = _handlers_up_to_root(get_logger("leadgen.document.renderer"))

        assert len(_file_handlers(handlers)) == 1
        console = [h for h in handlers if not isinstance(h, logging.FileHandler)]
        assert len(console) == 1

    def test_setup_is_idempotent(self):
        before = list(setup_logger().handlers)
        get_logger("leadgen.generation.factory")
        assert setup_logger().handlers == before


class TestLogFile:

    def test_file_lives_under_settings_logs_dir(self):
        (handler,) = _file_handlers(setup_logger().handlers)
        assert Path(handler.baseFilename).parent == Path(get_settings().logs_dir).resolve()

    def test_one_line_per_call(self):
        (handler,) = _file_handlers(setup_logger().handlers)
        marker = f"once-{uuid.uuid4().hex}"

        get_logger("leadgen.pipeline.generation_pipeline").info(marker)
        get_logger("api.wizard_service").info(marker)
        handler.flush()

        text = Path(handler.baseFilename).read_text(encoding="utf-8")
        assert text.count(marker) == 2
