import logging
from pathlib import Path

import pytest

from towerbalance.parser import parse_tower
from towerbalance.registry import NodeRegistry

DATA_DIR = Path(__file__).parent / "data" / "towers"

EXAMPLE_TOWER = """\
pbga (66)
xhth (57)
ebii (61)
havc (66)
ktlj (57)
fwft (72) -> ktlj, cntj, xhth
qoyq (66)
padx (45) -> pbga, havc, qoyq
tknk (41) -> ugml, padx, fwft
jptl (61)
ugml (68) -> gyxo, ebii, jptl
gyxo (61)
cntj (57)
"""


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@pytest.fixture
def example_text() -> str:
    return EXAMPLE_TOWER


@pytest.fixture
def example_registry() -> NodeRegistry:
    return parse_tower(EXAMPLE_TOWER)


@pytest.fixture
def example_path() -> Path:
    return DATA_DIR / "example.txt"
