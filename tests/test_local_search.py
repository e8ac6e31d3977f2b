import random

from gcp.graph import AdjacencyList, AdjacencyMatrix
from gcp.local_search import improve_phase, local_search, merge_smallest_classes
from gcp.solution import count_forbidden_edges, is_valid, neighbor_sets, to_class_list, to_coloring


def test_local_search_repairs_chain(chain, rng):
    class_list = to_class_list([1, 2, 2, 3])

    assert local_search(chain, class_list, rng)
    coloring = to_coloring(class_list, 4)
    assert is_valid(chain, coloring)
    assert count_forbidden_edges(neighbor_sets(chain), coloring) == 0


def test_local_search_moves_single_vertex(chain, rng):
    class_list = to_class_list([1, 2, 2, 3])
    local_search(chain, class_list, rng)
    coloring = to_coloring(class_list, 4)

    changed = [v for v, (a, b) in enumerate(zip([1, 2, 2, 3], coloring)) if a != b]
    assert len(changed) == 1
    assert changed[0] in (1, 2)


def test_local_search_without_conflicts_is_noop(chain, rng):
    class_list = [[0, 2], [1, 3]]

    assert local_search(chain, class_list, rng)
    assert class_list == [[0, 2], [1, 3]]


def test_local_search_gives_up_when_impossible(k5, rng):
    class_list = [[0, 1], [2], [3], [4]]

    assert not local_search(k5, class_list, rng)
    assert sorted(v for c in class_list for v in c) == [0, 1, 2, 3, 4]


def test_local_search_never_increases_conflicts(myciel3):
    adjacency = neighbor_sets(myciel3)
    for seed in range(20):
        rng = random.Random(seed)
        coloring = [rng.randint(1, 3) for _ in range(myciel3.num_vertices())]
        class_list = to_class_list(coloring, num_classes=3)
        before = count_forbidden_edges(adjacency, coloring)

        local_search(myciel3, class_list, rng, adjacency)
        after = count_forbidden_edges(adjacency, to_coloring(class_list, myciel3.num_vertices()))

        assert after <= before


def test_merge_smallest_classes():
    merged = merge_smallest_classes([[0, 1, 2], [], [3], [4, 5], [6]])

    assert merged[0] == [0, 1, 2]
    assert merged[1] == [4, 5]
    assert sorted(merged[2]) == [3, 6]
    assert len(merged) == 3


def test_improve_phase_merges_redundant_classes(rng):
    graph = AdjacencyList.from_edges(4, [(0, 1), (2, 3)])
    class_list = [[0], [1], [2], [3]]

    improved = improve_phase(graph, class_list, rng)

    assert len(improved) == 2
    assert is_valid(graph, to_coloring(improved, 4))


def test_improve_phase_keeps_optimal_coloring(k5, rng):
    improved = improve_phase(k5, [[0], [1], [2], [3], [4]], rng)

    assert len(improved) == 5
    assert is_valid(k5, to_coloring(improved, 5))


def test_improve_phase_never_adds_classes(myciel3):
    trivial = [[v] for v in range(myciel3.num_vertices())]
    for seed in range(5):
        improved = improve_phase(myciel3, trivial, random.Random(seed))

        assert len(improved) <= len(trivial)
        assert is_valid(myciel3, to_coloring(improved, myciel3.num_vertices()))


def test_improve_phase_on_single_class(rng):
    graph = AdjacencyMatrix(3)

    assert improve_phase(graph, [[0, 1, 2]], rng) == [[0, 1, 2]]


class ConflictRecorder(random.Random):
    """Records the forbidden-edge count each time a vertex is drawn."""

    def watch(self, adjacency, class_list, num_vertices):
        self.adjacency = adjacency
        self.class_list = class_list
        self.num_vertices = num_vertices
        self.history = []

    def choice(self, seq):
        coloring = to_coloring(self.class_list, self.num_vertices)
        self.history.append(count_forbidden_edges(self.adjacency, coloring))
        return super().choice(seq)


def test_local_search_conflicts_never_increase_between_iterations(myciel3):
    adjacency = neighbor_sets(myciel3)
    n = myciel3.num_vertices()
    for seed in range(20):
        rng = ConflictRecorder(seed)
        coloring = [rng.randint(1, 3) for _ in range(n)]
        class_list = to_class_list(coloring, num_classes=3)
        rng.watch(adjacency, class_list, n)

        local_search(myciel3, class_list, rng, adjacency)
        rng.history.append(count_forbidden_edges(adjacency, to_coloring(class_list, n)))

        assert all(later <= earlier for earlier, later in zip(rng.history, rng.history[1:]))
