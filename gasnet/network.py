"""Gas transport network: stations, pipes, and the operations over them."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from gasnet.algorithms.base import INF_COST, Capacity, StationID
from gasnet.algorithms.max_flow import calc_max_flow, calc_max_flow_summary
from gasnet.algorithms.metrics import pipe_capacity
from gasnet.algorithms.spf import shortest_path
from gasnet.algorithms.topo import topological_order
from gasnet.algorithms.types import (
    Failure,
    FailureKind,
    FlowSummary,
    LinkedPipeInfo,
    Outcome,
    PathResult,
)
from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.logging import get_logger
from gasnet.model.entities import Pipe, Station
from gasnet.model import search
from gasnet.model.store import PipeStore, StationStore
from gasnet import topology

if TYPE_CHECKING:
    import networkx as nx
    import pandas as pd

logger = get_logger(__name__)


class GasNetwork:
    """A container for compressor stations and pipes.

    The derived graph is never stored; each query rebuilds the view it needs
    from the current records.

    Attributes:
        config: Validation and capacity-scaling configuration.
        pipes: Pipe records in insertion order.
        stations: Station records in insertion order.
    """

    def __init__(self, config: NetworkConfig = NETWORK_CONFIG) -> None:
        self.config = config
        self.pipes = PipeStore(config)
        self.stations = StationStore()

    # Records

    def add_station(self, station: Station) -> int:
        """Add a station and return its assigned id."""
        return self.stations.add(station)

    def add_pipe(self, pipe: Pipe) -> int:
        """Add a pipe and return its assigned id."""
        return self.pipes.add(pipe)

    def delete_station(self, station_id: int) -> bool:
        """Delete a station and unlink every pipe attached to it."""
        if station_id not in self.stations:
            return False
        for pipe in self.pipes:
            if station_id in (pipe.source_station_id, pipe.dest_station_id):
                topology.unlink_pipe(self.pipes, pipe.id)
        return self.stations.delete(station_id)

    def delete_pipe(self, pipe_id: int) -> bool:
        return self.pipes.delete(pipe_id)

    # Topology mutation

    def link_pipe(self, pipe_id: int, source_id: int, dest_id: int) -> Outcome[Pipe]:
        return topology.link_pipe(self.pipes, pipe_id, source_id, dest_id)

    def unlink_pipe(self, pipe_id: int) -> Outcome[Pipe]:
        return topology.unlink_pipe(self.pipes, pipe_id)

    def find_free_pipe(self, diameter: int) -> Optional[int]:
        return topology.find_free_pipe(self.pipes, diameter)

    def connect_stations(
        self,
        source_id: int,
        dest_id: int,
        diameter: int,
        length: Optional[float] = None,
        km_mark: str = "",
        under_repair: bool = False,
    ) -> Outcome[Pipe]:
        """Connect two stations, reusing a free pipe or creating one.

        See ``gasnet.topology.connect_stations``.
        """
        return topology.connect_stations(
            self.pipes,
            self.stations,
            source_id,
            dest_id,
            diameter,
            length=length,
            km_mark=km_mark,
            under_repair=under_repair,
        )

    # Record edits

    def set_pipe_repair(self, pipe_id: int, under_repair: bool) -> Outcome[Pipe]:
        """Put a pipe under repair or return it to service."""
        pipe = self.pipes.get(pipe_id)
        if pipe is None:
            logger.warning("Pipe %s not found", pipe_id)
            return Failure(FailureKind.UNKNOWN_ID, f"Pipe {pipe_id} not found")
        pipe.under_repair = under_repair
        logger.info(
            "Pipe %s %s", pipe_id, "under repair" if under_repair else "back in service"
        )
        return pipe

    def rename_station(self, station_id: int, name: str) -> Outcome[Station]:
        station = self.stations.get(station_id)
        if station is None:
            logger.warning("Station %s not found", station_id)
            return Failure(FailureKind.UNKNOWN_ID, f"Station {station_id} not found")
        logger.info("Station %s renamed: %r -> %r", station_id, station.name, name)
        station.name = name
        return station

    # Search

    def search_pipes(
        self,
        pipe_id: Optional[int] = None,
        km_mark: Optional[str] = None,
        diameter: Optional[int] = None,
        under_repair: Optional[bool] = None,
        min_length: Optional[float] = None,
        max_length: Optional[float] = None,
    ) -> List[Pipe]:
        """Return pipes matching every given filter, in enumeration order.

        Filters left as None are not applied. ``km_mark`` matches as a
        substring; the length range is inclusive and open-ended on a missing
        side.
        """
        found = self.pipes.all()
        if pipe_id is not None:
            found = search.search_by_id(found, pipe_id)
        if km_mark is not None:
            found = search.pipes_by_km_mark(found, km_mark)
        if diameter is not None:
            found = search.pipes_by_diameter(found, diameter)
        if under_repair is not None:
            found = search.pipes_by_repair(found, under_repair)
        if min_length is not None or max_length is not None:
            found = search.pipes_by_length(
                found,
                0.0 if min_length is None else min_length,
                INF_COST if max_length is None else max_length,
            )
        return found

    def search_stations(
        self,
        station_id: Optional[int] = None,
        name: Optional[str] = None,
        classification: Optional[str] = None,
        working: Optional[bool] = None,
        min_load: Optional[float] = None,
        max_load: Optional[float] = None,
        min_working: Optional[int] = None,
        max_working: Optional[int] = None,
    ) -> List[Station]:
        """Return stations matching every given filter, in enumeration order.

        ``min_load``/``max_load`` bound the working-workshop percentage;
        stations without workshops never match a load filter.
        """
        found = self.stations.all()
        if station_id is not None:
            found = search.search_by_id(found, station_id)
        if name is not None:
            found = search.stations_by_name(found, name)
        if classification is not None:
            found = search.stations_by_classification(found, classification)
        if working is not None:
            found = search.stations_by_status(found, working)
        if min_load is not None or max_load is not None:
            found = search.stations_by_workshop_load(
                found,
                0.0 if min_load is None else min_load,
                100.0 if max_load is None else max_load,
            )
        if min_working is not None or max_working is not None:
            found = search.stations_by_working_workshops(
                found,
                0 if min_working is None else min_working,
                INF_COST if max_working is None else max_working,
            )
        return found

    # Queries

    def shortest_path(self, start: StationID, end: StationID) -> Outcome[PathResult]:
        return shortest_path(self.pipes.all(), self.stations.ids(), start, end)

    def max_flow(self, source: StationID, sink: StationID) -> Outcome[Capacity]:
        """Return the max flow value or a ``Failure``.

        A zero flow is falsy too; test with ``isinstance(result, Failure)``.
        """
        return calc_max_flow(self.pipes.all(), source, sink, self.config)

    def max_flow_summary(
        self, source: StationID, sink: StationID
    ) -> Outcome[FlowSummary]:
        return calc_max_flow_summary(self.pipes.all(), source, sink, self.config)

    def topological_order(self) -> Outcome[List[StationID]]:
        return topological_order(self.pipes.all())

    def capacity(self, pipe: Pipe) -> Capacity:
        return pipe_capacity(pipe, self.config)

    def network_summary(self) -> List[LinkedPipeInfo]:
        """Return every linked pipe with its endpoints and capacity."""
        return [
            LinkedPipeInfo(
                pipe_id=pipe.id,
                source=pipe.source_station_id,
                dest=pipe.dest_station_id,
                length=pipe.length,
                diameter=pipe.diameter,
                under_repair=pipe.under_repair,
                capacity=self.capacity(pipe),
            )
            for pipe in self.pipes
            if pipe.is_linked
        ]

    def summary_frame(self) -> "pd.DataFrame":
        """Return ``network_summary`` as a DataFrame indexed by pipe id."""
        import pandas as pd

        columns = [
            "pipe_id",
            "source",
            "dest",
            "length",
            "diameter",
            "under_repair",
            "capacity",
        ]
        rows = [
            [getattr(info, col) for col in columns] for info in self.network_summary()
        ]
        return pd.DataFrame(rows, columns=columns).set_index("pipe_id")

    def to_networkx(self) -> "nx.MultiDiGraph":
        """Export stations and linked pipes as a NetworkX MultiDiGraph.

        Edge keys are pipe ids. Edge attributes: ``length``, ``diameter``,
        ``under_repair``, ``capacity``.
        """
        import networkx as nx

        graph = nx.MultiDiGraph()
        for station in self.stations:
            graph.add_node(station.id, name=station.name, working=station.working)
        for info in self.network_summary():
            graph.add_edge(
                info.source,
                info.dest,
                key=info.pipe_id,
                length=info.length,
                diameter=info.diameter,
                under_repair=info.under_repair,
                capacity=info.capacity,
            )
        return graph
