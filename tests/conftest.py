import pytest

from stache.template import DictPartialProvider, TemplateProcessor

from tests.infrastructure import RecordingSink


@pytest.fixture
def processor() -> TemplateProcessor:
    """Processor with default options and no partials."""
    return TemplateProcessor()


@pytest.fixture
def partials() -> DictPartialProvider:
    """Empty in-memory partial registry; tests register what they need."""
    return DictPartialProvider()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
