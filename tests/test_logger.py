import logging

from restexec.logger import TRACE_LEVEL, BoundLogger, create_logger


class DuckLogger:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def debug(self, msg: str, *args) -> None:
        self.messages.append(("debug", msg % args))

    def warn(self, msg: str, *args) -> None:
        self.messages.append(("warn", msg % args))


def test_level_filtering_with_duck_typed_logger() -> None:
    duck = DuckLogger()
    logger = BoundLogger(duck, level="warn")
    logger.debug("hidden %s", 1)
    logger.warn("shown %s", 2)
    logger.info("no handler")
    assert duck.messages == [("warn", "shown 2")]


def test_child_logger_uses_named_python_logger(caplog) -> None:
    base = logging.getLogger("restexec.test")
    logger = create_logger(logger=base, level="debug").child("http")
    with caplog.at_level(logging.DEBUG, logger="restexec.test.http"):
        logger.debug("HTTP %s", "GET")
    assert [record.name for record in caplog.records] == ["restexec.test.http"]
    assert caplog.records[0].getMessage() == "HTTP GET"


def test_create_logger_passes_bound_logger_through() -> None:
    bound = BoundLogger(DuckLogger())
    assert create_logger(logger=bound) is bound


def test_logging_failures_are_swallowed() -> None:
    class Exploding:
        def log(self, *args, **kwargs) -> None:
            raise RuntimeError("boom")

    BoundLogger(Exploding()).error("still fine")


def test_trace_messages_use_trace_level(caplog) -> None:
    base = logging.getLogger("restexec.trace-test")
    logger = BoundLogger(base, level="trace")
    with caplog.at_level(TRACE_LEVEL, logger="restexec.trace-test"):
        logger.trace("headers %s", {"a": "1"})
        BoundLogger(base, level="debug").trace("hidden")
    assert [(record.levelname, record.getMessage()) for record in caplog.records] == [
        ("TRACE", "headers {'a': '1'}")
    ]
