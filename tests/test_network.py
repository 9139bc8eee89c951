"""Tests for the GasNetwork facade: records, mutation, queries and exports."""

import pytest

from gasnet.algorithms.metrics import pipe_capacity
from gasnet.algorithms.types import Failure, FailureKind, LinkedPipeInfo, PathResult
from gasnet.model.entities import Pipe, Station
from gasnet.network import GasNetwork


class TestScenarios:
    def test_shortest_path_line(self, line3):
        res = line3.shortest_path(1, 3)
        assert isinstance(res, PathResult)
        assert res.total_length == 150
        assert res.stations == [1, 2, 3]

    def test_shortest_path_with_repair(self, line3):
        line3.pipes.get(11).under_repair = True
        assert line3.shortest_path(1, 3).kind is FailureKind.NO_PATH

    def test_parallel_max_flow(self, make_network):
        net = make_network(
            [1, 2], [(20, 1, 2, 10, 500, False), (21, 1, 2, 10, 500, False)]
        )
        assert net.max_flow(1, 2) == 2 * pipe_capacity(Pipe(length=10, diameter=500))

    def test_two_way_pipes_cycle(self, make_network):
        net = make_network([1, 2], [(1, 1, 2, 10, 500, False), (2, 2, 1, 10, 500, False)])
        assert net.topological_order().kind is FailureKind.CYCLE_DETECTED

    def test_find_free_then_link(self, mixed_store):
        pipe_id = mixed_store.find_free_pipe(700)
        assert pipe_id == 3
        mixed_store.link_pipe(pipe_id, 1, 2)
        assert mixed_store.find_free_pipe(700) is None


class TestRecords:
    def test_build_from_scratch(self):
        net = GasNetwork()
        a = net.add_station(Station(name="North", workshop_count=3, workshop_working=2))
        b = net.add_station(Station(name="South"))
        assert (a, b) == (1, 2)

        pipe = net.connect_stations(a, b, diameter=700, length=100)
        assert pipe.id == 1
        assert net.shortest_path(a, b).total_length == 100
        assert net.max_flow(a, b) == net.capacity(pipe)
        assert net.topological_order() == [a, b]

    def test_delete_station_unlinks_its_pipes(self, line3):
        assert line3.delete_station(2) is True
        assert line3.pipes.get(10).is_free
        assert line3.pipes.get(11).is_free
        assert 2 not in line3.stations
        assert line3.delete_station(2) is False

    def test_delete_pipe(self, line3):
        assert line3.delete_pipe(11) is True
        assert line3.shortest_path(1, 3).kind is FailureKind.NO_PATH
        assert line3.delete_pipe(11) is False

    def test_max_flow_summary_failure(self, line3):
        res = line3.max_flow_summary(1, 9)
        assert isinstance(res, Failure)
        assert res.kind is FailureKind.NOT_CONNECTED

    def test_unlink_unknown(self, line3):
        assert line3.unlink_pipe(404).kind is FailureKind.UNKNOWN_ID


class TestSummary:
    def test_network_summary_lists_linked_pipes(self, mixed_store):
        rows = mixed_store.network_summary()
        assert rows == [
            LinkedPipeInfo(
                pipe_id=1,
                source=1,
                dest=2,
                length=20,
                diameter=700,
                under_repair=False,
                capacity=pipe_capacity(mixed_store.pipes.get(1)),
            )
        ]

    def test_summary_includes_repaired_with_zero_capacity(self, diamond):
        rows = {row.pipe_id: row for row in diamond.network_summary()}
        assert sorted(rows) == [1, 2, 3, 4, 5]
        assert rows[5].under_repair is True
        assert rows[5].capacity == 0

    def test_summary_frame(self, diamond):
        frame = diamond.summary_frame()
        assert list(frame.index) == [1, 2, 3, 4, 5]
        assert list(frame.columns) == [
            "source",
            "dest",
            "length",
            "diameter",
            "under_repair",
            "capacity",
        ]
        assert frame.loc[5, "capacity"] == 0

    def test_summary_frame_empty(self):
        frame = GasNetwork().summary_frame()
        assert frame.empty

    def test_to_networkx(self, diamond):
        graph = diamond.to_networkx()
        assert sorted(graph.nodes) == [1, 2, 3, 4]
        assert graph.number_of_edges() == 5
        assert graph.edges[1, 4, 5]["under_repair"] is True
        assert graph.edges[1, 2, 1]["length"] == 10
        assert graph.nodes[1]["name"] == "CS1"

    @pytest.mark.parametrize("pipe_id", [2, 3])
    def test_free_pipes_not_exported(self, mixed_store, pipe_id):
        graph = mixed_store.to_networkx()
        assert all(key != pipe_id for _, _, key in graph.edges(keys=True))


class TestRecordEdits:
    def test_set_pipe_repair_round_trip(self, line3):
        pipe = line3.set_pipe_repair(11, True)
        assert pipe.under_repair is True
        assert line3.shortest_path(1, 3).kind is FailureKind.NO_PATH
        line3.set_pipe_repair(11, False)
        assert line3.shortest_path(1, 3).total_length == 150

    def test_set_pipe_repair_unknown(self, line3):
        assert line3.set_pipe_repair(404, True).kind is FailureKind.UNKNOWN_ID

    def test_rename_station(self, line3):
        assert line3.rename_station(2, "Hub").name == "Hub"
        assert line3.stations.get(2).name == "Hub"
        assert line3.rename_station(404, "x").kind is FailureKind.UNKNOWN_ID


class TestSearch:
    def test_no_filters_returns_everything(self, mixed_store):
        assert [p.id for p in mixed_store.search_pipes()] == [1, 2, 3]
        assert [s.id for s in mixed_store.search_stations()] == [1, 2]

    def test_pipe_filters_combine(self, mixed_store):
        found = mixed_store.search_pipes(diameter=700, min_length=30)
        assert [p.id for p in found] == [3]
        assert [p.id for p in mixed_store.search_pipes(max_length=20)] == [1, 2]
        assert [p.id for p in mixed_store.search_pipes(pipe_id=2)] == [2]
        assert mixed_store.search_pipes(pipe_id=2, diameter=700) == []

    def test_pipe_repair_filter(self, diamond):
        assert [p.id for p in diamond.search_pipes(under_repair=True)] == [5]
        assert len(diamond.search_pipes(under_repair=False)) == 4

    def test_km_mark_substring(self, mixed_store):
        # Fixture pipes carry km marks "km1", "km2", "km3"
        assert [p.id for p in mixed_store.search_pipes(km_mark="km3")] == [3]

    def test_station_filters(self):
        net = GasNetwork()
        net.add_station(
            Station(
                name="North", workshop_count=4, workshop_working=3, classification="A"
            )
        )
        net.add_station(Station(name="South", workshop_count=2, workshop_working=0))
        net.add_station(Station(name="Depot", working=False))

        assert [s.id for s in net.search_stations(name="th")] == [1, 2]
        assert [s.id for s in net.search_stations(classification="A")] == [1]
        assert [s.id for s in net.search_stations(working=False)] == [3]
        assert [s.id for s in net.search_stations(min_load=50)] == [1]
        # Stations without workshops never match a load filter
        assert [s.id for s in net.search_stations(max_load=10)] == [2]
        assert [s.id for s in net.search_stations(min_working=1)] == [1]
        assert [s.id for s in net.search_stations(max_working=0)] == [2, 3]
