import logging

from pagewise.utils.logger import ColoredFormatter, logger


def _record(level=logging.WARNING, msg="Saved location %s rejected"):
    return logging.LogRecord(
        "pagewise", level, "/tmp/position.py", 42, msg, ("loc-7",), None
    )


def test_plain_formatter_fills_custom_fields():
    formatter = ColoredFormatter(
        "[%(levelname2)s] %(location2)s - %(message2)s", use_color=False
    )
    text = formatter.format(_record())
    assert text == "[WARNING] position:42 - Saved location loc-7 rejected"


def test_colored_formatter_keeps_message_text():
    formatter = ColoredFormatter("%(message2)s", use_color=True)
    assert "Saved location loc-7 rejected" in formatter.format(_record())


def test_package_logger_has_stream_and_file_handlers():
    kinds = {type(handler) for handler in logger.handlers}
    assert logging.FileHandler in kinds
    assert logger.name == "pagewise"
