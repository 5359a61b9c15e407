from __future__ import annotations

import pytest

from errgen.attrs import StandardAttributeParser
from tests._fixtures.declarations import RecordingParser


@pytest.fixture
def attribute_parser() -> StandardAttributeParser:
    """Provide the default attribute parser."""
    return StandardAttributeParser()


@pytest.fixture
def recording_parser() -> RecordingParser:
    """Provide a parser that records calls and never fails."""
    return RecordingParser()
