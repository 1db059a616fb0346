"""
Pytest configuration and shared fixtures.
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from jobcatalog.logger import get_logger, reset_logger

WELDER = {
    "key": 1,
    "name": "Welder",
    "details": "Joins metal parts",
    "tools": "torch, mask",
    "screen": "Fabrication",
    "link": "https://example.com/welder",
}


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger into tmp_path so tests never write to ./logs."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def welder_entry() -> Dict[str, Any]:
    return copy.deepcopy(WELDER)


@pytest.fixture
def welder_payload(welder_entry) -> Dict[str, Any]:
    return {"entries": [welder_entry]}


@pytest.fixture
def multi_payload() -> Dict[str, Any]:
    """Three entries, deliberately unsorted and with a duplicate key."""
    return {
        "entries": [
            {
                "key": 7,
                "name": "Painter",
                "details": "Applies coatings",
                "tools": "brush, roller",
                "screen": "Finishing",
                "link": "https://example.com/painter",
            },
            copy.deepcopy(WELDER),
            {
                "key": 7,
                "name": "  Inspector ",
                "details": "",
                "tools": "GAUGE",
                "screen": "QA",
                "link": "not a url",
            },
        ]
    }


@pytest.fixture
def catalog_file(tmp_path, multi_payload) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(multi_payload), encoding="utf-8")
    return path
