import random

import networkx as nx
import pytest

from gasnet.algorithms.topo import CycleError, order_stations, topological_order
from gasnet.algorithms.types import Failure, FailureKind
from gasnet.model.entities import Pipe


def _respects_pipes(order, net):
    position = {sid: i for i, sid in enumerate(order)}
    for pipe in net.pipes:
        if pipe.is_linked:
            if position[pipe.source_station_id] >= position[pipe.dest_station_id]:
                return False
    return True


def test_line(line3):
    assert topological_order(line3.pipes.all()) == [1, 2, 3]


def test_diamond_order_is_deterministic(diamond):
    order = topological_order(diamond.pipes.all())
    assert order == [1, 3, 2, 4]
    assert _respects_pipes(order, diamond)


def test_empty_without_linked_pipes(make_network):
    assert topological_order(make_network([1, 2, 3], []).pipes.all()) == []
    net = make_network([1], [(1, 0, 0, 5, 500, False)])
    assert topological_order(net.pipes.all()) == []


def test_two_station_cycle(make_network):
    net = make_network([1, 2], [(1, 1, 2, 10, 500, False), (2, 2, 1, 10, 500, False)])
    res = topological_order(net.pipes.all())
    assert isinstance(res, Failure)
    assert res.kind is FailureKind.CYCLE_DETECTED


def test_repaired_pipe_still_closes_cycle(line3):
    # Pipe 12 is under repair but the order view still counts it
    line3.pipes.add_existing(
        Pipe(
            id=12,
            length=5,
            diameter=500,
            under_repair=True,
            source_station_id=3,
            dest_station_id=1,
        )
    )
    res = topological_order(line3.pipes.all())
    assert res.kind is FailureKind.CYCLE_DETECTED


def test_cycle_in_later_component(make_network):
    net = make_network(
        [1, 2, 5, 6, 7],
        [
            (1, 1, 2, 10, 500, False),
            (2, 5, 6, 10, 500, False),
            (3, 6, 7, 10, 500, False),
            (4, 7, 5, 10, 500, False),
        ],
    )
    res = topological_order(net.pipes.all())
    assert isinstance(res, Failure)


def test_parallel_pipes_are_not_a_cycle(make_network):
    net = make_network([1, 2], [(1, 1, 2, 10, 500, False), (2, 1, 2, 20, 700, False)])
    assert topological_order(net.pipes.all()) == [1, 2]


def test_independent_components_ordered_by_id():
    # Roots are visited in ascending id and the finish order is reversed,
    # so the component rooted at the higher id comes first
    assert order_stations({3: [4], 4: [], 1: [2], 2: []}) == [3, 4, 1, 2]


def test_order_stations_raises_cycle_error():
    with pytest.raises(CycleError) as exc_info:
        order_stations({1: [2], 2: [3], 3: [2]})
    assert exc_info.value.station == 2


def test_deep_chain_does_not_recurse():
    n = 5000
    adjacency = {i: [i + 1] for i in range(1, n)}
    adjacency[n] = []
    assert order_stations(adjacency) == list(range(1, n + 1))


@pytest.mark.parametrize("seed", range(10))
def test_agrees_with_networkx(make_network, seed):
    rng = random.Random(seed)
    stations = list(range(1, 9))
    specs = []
    for pid in range(1, rng.randint(3, 12)):
        src, dst = rng.sample(stations, 2)
        specs.append((pid, src, dst, 10, 500, rng.random() < 0.3))
    net = make_network(stations, specs)

    res = topological_order(net.pipes.all())
    graph = nx.DiGraph(net.to_networkx())
    if nx.is_directed_acyclic_graph(graph):
        assert not isinstance(res, Failure)
        assert _respects_pipes(res, net)
    else:
        assert isinstance(res, Failure)
        assert res.kind is FailureKind.CYCLE_DETECTED
