import logging

import pytest


@pytest.fixture(autouse=True)
def restore_glslext_logger():
    """Undo handler/level changes made by log.setup_console()."""
    logger = logging.getLogger("glslext")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
