import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs configure structlog against a captured stream; undo it."""
    yield
    structlog.reset_defaults()
