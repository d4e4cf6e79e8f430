"""
Pytest configuration for docx-flow
"""

import pytest
import logging
import sys
from pathlib import Path

from docx_flow.styles import StyleContext


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()
    package_logger = logging.getLogger("docx_flow")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def style_context():
    """Style sheet with Normal, a heading, a list style and a table style."""
    return StyleContext.from_dict({
        "defaults": {
            "paragraphProps": {"spacing": {"after": 160, "line": 259, "lineRule": "auto"}},
            "runProps": {"fontFamily": "Calibri", "fontSize": 22},
        },
        "styles": {
            "Normal": {
                "type": "paragraph",
                "default": True,
                "name": "Normal",
                "paragraphProps": {"spacing": {"after": 200}},
                "runProps": {"fontSize": 24},
            },
            "Heading1": {
                "type": "paragraph",
                "basedOn": "Normal",
                "name": "heading 1",
                "paragraphProps": {"outlineLvl": 0, "justification": "center", "keepNext": True},
                "runProps": {"bold": True, "fontSize": 32},
            },
            "BodyIndent": {
                "type": "paragraph",
                "basedOn": "Normal",
                "paragraphProps": {"indent": {"firstLine": 720}},
            },
            "ListParagraph": {
                "type": "paragraph",
                "basedOn": "Normal",
                "paragraphProps": {"indent": {"left": 720}, "contextualSpacing": True},
            },
            "Emphasis": {
                "type": "character",
                "runProps": {"italic": True, "color": "C00000"},
            },
            "GridTable": {
                "type": "table",
                "tableProps": {
                    "borders": {"top": {"val": "single", "size": 8, "color": "000000"}},
                    "cellMargins": {"left": {"value": 108, "type": "dxa"}, "right": {"value": 108, "type": "dxa"}},
                    "justification": "center",
                },
                "paragraphProps": {"spacing": {"after": 0}},
            },
        },
        "numbering": {
            "abstract_numberings": {
                "1": {
                    "levels": {
                        "0": {"format": "decimal", "text": "%1.", "start": 1,
                              "indent": {"left": 720, "hanging": 360}},
                        "1": {"format": "lowerLetter", "text": "%1.%2)", "start": 1,
                              "indent": {"left": 1440, "hanging": 360}},
                    }
                },
                "2": {
                    "levels": {
                        "0": {"format": "bullet", "text": "\uf0b7",
                              "indent": {"left": 720, "hanging": 360},
                              "run": {"fontFamily": "Symbol"}},
                    }
                },
            },
            "numbering_instances": {
                "1": {"abstractNumId": "1"},
                "2": {"abstractNumId": "2"},
                "3": {"abstractNumId": "1", "levels": {"0": {"start": 5}}},
            },
        },
    })


def make_paragraph(text=None, **attrs):
    """Build a paragraph node with an optional single text child."""
    content = [{"type": "text", "text": text}] if text else []
    return {"type": "paragraph", "attrs": attrs, "content": content}


def make_sect_pr(*elements):
    """Build a ``w:sectPr`` element from ``(name, attributes)`` pairs."""
    return {
        "type": "element",
        "name": "w:sectPr",
        "elements": [{"name": name, "attributes": attributes} for name, attributes in elements],
    }


@pytest.fixture
def paragraph_factory():
    return make_paragraph


@pytest.fixture
def sect_pr_factory():
    return make_sect_pr


# Configure pytest to ignore logging errors
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
