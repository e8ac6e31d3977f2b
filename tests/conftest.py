import random
from pathlib import Path

import pytest

from gcp.graph import AdjacencyList, AdjacencyMatrix
from gcp.instance import GraphInstance

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def myciel3_instance() -> GraphInstance:
    return GraphInstance.from_file(DATA_DIR / "myciel3.col")


@pytest.fixture
def myciel3(myciel3_instance) -> AdjacencyMatrix:
    """Mycielski graph on 11 vertices: triangle free, chromatic number 4."""
    return myciel3_instance.graph


@pytest.fixture
def chain() -> AdjacencyList:
    """Path 0-1-2-3."""
    return AdjacencyList.from_edges(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def k5() -> AdjacencyMatrix:
    return AdjacencyMatrix.complete(5)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(12345)
