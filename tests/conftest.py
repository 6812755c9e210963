"""
Shared pytest fixtures for mt940tags tests.

Provides registries and sample tag contents.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mt940tags.core.preferences import ParserConfig
from mt940tags.parsers.registry import TagRegistry


# Sample tag contents keyed by tag id, one valid value per known tag
SAMPLE_CONTENTS = {
    "20": "B4E08MS9D00A0009",
    "21": "X",
    "25": "123456789",
    "28": "123/1",
    "NS": "22Ftest narrative",
    "60": "C140507EUR0,00",
    "61": "1405070507C500,00NTRFNONREF//AUXREF\nSUPPLEMENTARY",
    "62": "D140508EUR500,00",
    "64": "C140508EUR500,00",
    "65": "C140509EUR500,00",
    "86": "LINE1\nLINE2",
    "MB": "{1:F01AAAABB99BSMK3513951576}{2:O9401506110804LRLRXXXX4A0700010012101711}{4:",
}


@pytest.fixture
def registry():
    """Provide a registry built from the default definitions."""
    return TagRegistry()


@pytest.fixture
def quiet_registry():
    """Provide a registry that does not log unknown tags."""
    return TagRegistry(config=ParserConfig(log_unknown_tags=False))


@pytest.fixture
def sample_contents():
    """Provide a copy of the sample tag contents."""
    return dict(SAMPLE_CONTENTS)
