import logging
import sys
import pytest

from httpsdk.core import configure_logging, set_aiohttp_logging_level


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.mark.unit
def test_configure_logging_installs_single_stdout_handler(restore_root_logger):
    configure_logging(logging.DEBUG)
    configure_logging(logging.DEBUG)

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stdout
    assert restore_root_logger.level == logging.DEBUG


@pytest.mark.unit
def test_set_aiohttp_logging_level():
    set_aiohttp_logging_level(logging.ERROR)

    assert logging.getLogger("aiohttp.client").level == logging.ERROR
    assert logging.getLogger("aiohttp.internal").level == logging.ERROR
