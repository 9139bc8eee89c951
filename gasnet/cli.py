"""Command-line interface for gasnet."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional

from gasnet.algorithms.types import Failure, FailureKind
from gasnet.config import NETWORK_CONFIG
from gasnet.io import load_network, save_network
from gasnet.logging import get_logger, level_for_flags, set_global_log_level
from gasnet.model.entities import Pipe, Station
from gasnet.network import GasNetwork

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 6,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = [
        max(max(len(str(row[i])) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in all_data[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_number(value: Any) -> str:
    """Return a number with up to two decimals, trailing zeros trimmed.

    Examples:
        150.0 -> "150"; 12.5 -> "12.5"; 35355.0 -> "35,355".
    """
    s = f"{float(value):,.2f}"
    return s.rstrip("0").rstrip(".")


def _fail(result: Failure) -> None:
    print(f"Error: {result}")
    raise SystemExit(1)


def _emit_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _inspect(network: GasNetwork) -> None:
    print("Stations:")
    station_rows = [
        [
            s.id,
            s.name,
            f"{s.workshop_working}/{s.workshop_count}",
            s.classification,
            "yes" if s.working else "no",
        ]
        for s in network.stations
    ]
    print(
        _format_table(["ID", "Name", "Workshops", "Class", "Working"], station_rows)
        or "   (none)"
    )

    print("\nGas transport network:")
    pipe_rows = [
        [
            f"{info.source} -> {info.dest}",
            info.pipe_id,
            _format_number(info.length),
            info.diameter,
            "REPAIR" if info.under_repair else "",
            _format_number(info.capacity),
        ]
        for info in network.network_summary()
    ]
    print(
        _format_table(
            ["Route", "Pipe", "Length km", "Diam mm", "Status", "Capacity"], pipe_rows
        )
        or "   No active connections."
    )

    free = [p for p in network.pipes if p.is_free]
    print(f"\nFree pipes: {len(free)}")


def _path(network: GasNetwork, start: int, end: int, as_json: bool) -> None:
    result = network.shortest_path(start, end)
    if isinstance(result, Failure):
        _fail(result)
        return
    if as_json:
        _emit_json(asdict(result))
        return
    print(f"Total length: {_format_number(result.total_length)} km")
    hops = [str(result.stations[0])]
    for pipe_id, station in zip(result.pipes, result.stations[1:]):
        hops.append(f"--(pipe {pipe_id})--> {station}")
    print("Path: " + " ".join(hops))


def _flow(network: GasNetwork, source: int, sink: int, as_json: bool) -> None:
    result = network.max_flow_summary(source, sink)
    if isinstance(result, Failure):
        _fail(result)
        return
    if as_json:
        _emit_json(
            {
                "source": source,
                "sink": sink,
                "total_flow": result.total_flow,
                "min_cut": [list(edge) for edge in result.min_cut],
            }
        )
        return
    print(
        f"Max flow from station {source} to station {sink}: "
        f"{_format_number(result.total_flow)}"
    )
    if result.min_cut:
        cut = ", ".join(f"{u}->{v}" for u, v in result.min_cut)
        print(f"Min cut: {cut}")


def _topo(network: GasNetwork, as_json: bool) -> None:
    result = network.topological_order()
    if isinstance(result, Failure):
        _fail(result)
        return
    if as_json:
        _emit_json({"order": result})
        return
    if not result:
        print("No linked pipes.")
        return
    print("Topological order: " + " ".join(map(str, result)))
def _connect(
    path: Path,
    network: GasNetwork,
    source: int,
    dest: int,
    diameter: int,
    length: Optional[float],
    km_mark: str,
    under_repair: bool,
) -> None:
    pipes_before = len(network.pipes)
    result = network.connect_stations(
        source,
        dest,
        diameter,
        length=length,
        km_mark=km_mark,
        under_repair=under_repair,
    )
    if isinstance(result, Failure):
        _fail(result)
        return
    created = len(network.pipes) > pipes_before
    verb = "Created and connected" if created else "Connected"
    print(f"{verb} pipe {result.id}: station {source} -> station {dest}")
    save_network(network, path)


def _disconnect(path: Path, network: GasNetwork, pipe_id: int) -> None:
    result = network.unlink_pipe(pipe_id)
    if isinstance(result, Failure):
        _fail(result)
        return
    print(f"Disconnected pipe {pipe_id}")
    save_network(network, path)


def _add_station(path: Path, network: GasNetwork, args: argparse.Namespace) -> None:
    station = Station(
        name=args.name,
        workshop_count=args.workshops,
        workshop_working=args.working_workshops,
        classification=args.classification,
        working=not args.stopped,
    )
    try:
        station_id = network.add_station(station)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1) from e
    print(f"Added station {station_id}: {station.name}")
    save_network(network, path)


def _add_pipe(path: Path, network: GasNetwork, args: argparse.Namespace) -> None:
    pipe = Pipe(
        km_mark=args.km_mark,
        length=args.length,
        diameter=args.diameter,
        under_repair=args.repair,
    )
    try:
        pipe_id = network.add_pipe(pipe)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1) from e
    print(
        f"Added free pipe {pipe_id}: "
        f"{_format_number(pipe.length)} km, {pipe.diameter} mm"
    )
    save_network(network, path)


def _repair(path: Path, network: GasNetwork, pipe_id: int, state: str) -> None:
    result = network.set_pipe_repair(pipe_id, state == "on")
    if isinstance(result, Failure):
        _fail(result)
        return
    status = "under repair" if result.under_repair else "back in service"
    print(f"Pipe {pipe_id} {status}")
    save_network(network, path)


def _rename(path: Path, network: GasNetwork, station_id: int, name: str) -> None:
    result = network.rename_station(station_id, name)
    if isinstance(result, Failure):
        _fail(result)
        return
    print(f"Station {station_id} renamed to {name}")
    save_network(network, path)


def _delete(path: Path, network: GasNetwork, kind: str, record_id: int) -> None:
    if kind == "pipe":
        deleted = network.delete_pipe(record_id)
    else:
        deleted = network.delete_station(record_id)
    if not deleted:
        _fail(
            Failure(
                FailureKind.UNKNOWN_ID, f"{kind.capitalize()} {record_id} not found"
            )
        )
        return
    print(f"Deleted {kind} {record_id}")
    save_network(network, path)


def _search(network: GasNetwork, args: argparse.Namespace) -> None:
    if args.target == "pipes":
        found = network.search_pipes(
            pipe_id=args.id,
            km_mark=args.km_mark,
            diameter=args.diameter,
            under_repair=args.under_repair,
            min_length=args.min_length,
            max_length=args.max_length,
        )
        headers = ["ID", "Km mark", "Length km", "Diam mm", "Status", "Route"]
        rows = [
            [
                p.id,
                p.km_mark,
                _format_number(p.length),
                p.diameter,
                "REPAIR" if p.under_repair else "",
                (
                    f"{p.source_station_id} -> {p.dest_station_id}"
                    if p.is_linked
                    else "free"
                ),
            ]
            for p in found
        ]
    else:
        found = network.search_stations(
            station_id=args.id,
            name=args.name,
            classification=args.classification,
            working=args.working,
            min_load=args.min_load,
            max_load=args.max_load,
            min_working=args.min_working,
            max_working=args.max_working,
        )
        headers = ["ID", "Name", "Workshops", "Load %", "Class", "Working"]
        rows = [
            [
                s.id,
                s.name,
                f"{s.workshop_working}/{s.workshop_count}",
                _format_number(s.workshop_load()),
                s.classification,
                "yes" if s.working else "no",
            ]
            for s in found
        ]

    if args.json:
        _emit_json([record.to_dict() for record in found])
        return
    if not found:
        print(f"No {args.target} found.")
        return
    print(f"Found {len(found)} {args.target}:")
    print(_format_table(headers, rows))


def _build_search_parser(subparsers: Any) -> List[argparse.ArgumentParser]:
    search_parser = subparsers.add_parser(
        "search", help="Find pipes or stations by attributes"
    )
    targets = search_parser.add_subparsers(dest="target", required=True)

    pipes_parser = targets.add_parser("pipes", help="Search pipes")
    pipes_parser.add_argument("--id", type=int, default=None, help="Pipe ID")
    pipes_parser.add_argument(
        "--km-mark", default=None, help="Substring of the kilometre mark"
    )
    pipes_parser.add_argument(
        "--diameter", "-d", type=int, default=None, help="Pipe diameter (mm)"
    )
    status = pipes_parser.add_mutually_exclusive_group()
    status.add_argument(
        "--repair",
        dest="under_repair",
        action="store_const",
        const=True,
        default=None,
        help="Only pipes under repair",
    )
    status.add_argument(
        "--in-service",
        dest="under_repair",
        action="store_const",
        const=False,
        help="Only pipes in service",
    )
    pipes_parser.add_argument(
        "--min-length", type=float, default=None, help="Minimum length (km)"
    )
    pipes_parser.add_argument(
        "--max-length", type=float, default=None, help="Maximum length (km)"
    )

    stations_parser = targets.add_parser("stations", help="Search stations")
    stations_parser.add_argument("--id", type=int, default=None, help="Station ID")
    stations_parser.add_argument("--name", default=None, help="Substring of the name")
    stations_parser.add_argument(
        "--class",
        dest="classification",
        default=None,
        help="Substring of the classification",
    )
    working = stations_parser.add_mutually_exclusive_group()
    working.add_argument(
        "--working",
        dest="working",
        action="store_const",
        const=True,
        default=None,
        help="Only stations in service",
    )
    working.add_argument(
        "--stopped",
        dest="working",
        action="store_const",
        const=False,
        help="Only stopped stations",
    )
    stations_parser.add_argument(
        "--min-load", type=float, default=None, help="Minimum workshop load (%%)"
    )
    stations_parser.add_argument(
        "--max-load", type=float, default=None, help="Maximum workshop load (%%)"
    )
    stations_parser.add_argument(
        "--min-working",
        type=int,
        default=None,
        help="Minimum number of working workshops",
    )
    stations_parser.add_argument(
        "--max-working",
        type=int,
        default=None,
        help="Maximum number of working workshops",
    )
    return [pipes_parser, stations_parser]


# Commands that start from an empty network when the file does not exist yet
_CREATES_FILE = ("add-station", "add-pipe")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``gasnet`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="gasnet",
        description="Analyze gas transport networks of compressor stations and pipes.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="COMMAND",
        help="Available commands",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show stations and linked pipes"
    )

    add_station_parser = subparsers.add_parser(
        "add-station", help="Add a compressor station and save"
    )
    add_station_parser.add_argument("--name", required=True, help="Station name")
    add_station_parser.add_argument(
        "--workshops", type=int, default=0, help="Number of workshops"
    )
    add_station_parser.add_argument(
        "--working-workshops",
        type=int,
        default=0,
        help="Number of workshops in operation",
    )
    add_station_parser.add_argument(
        "--class", dest="classification", default="", help="Station class label"
    )
    add_station_parser.add_argument(
        "--stopped", action="store_true", help="Add the station out of service"
    )

    add_pipe_parser = subparsers.add_parser(
        "add-pipe", help="Add a free pipe and save"
    )
    add_pipe_parser.add_argument(
        "--length", "-l", type=float, required=True, help="Pipe length (km)"
    )
    add_pipe_parser.add_argument(
        "--diameter", "-d", type=int, required=True, help="Pipe diameter (mm)"
    )
    add_pipe_parser.add_argument("--km-mark", default="", help="Kilometre mark")
    add_pipe_parser.add_argument(
        "--repair", action="store_true", help="Add the pipe under repair"
    )

    repair_parser = subparsers.add_parser(
        "repair", help="Set the repair status of a pipe and save"
    )
    repair_parser.add_argument("pipe_id", type=int, help="Pipe ID")
    repair_parser.add_argument("state", choices=["on", "off"], help="Repair status")

    rename_parser = subparsers.add_parser("rename", help="Rename a station and save")
    rename_parser.add_argument("station_id", type=int, help="Station ID")
    rename_parser.add_argument("name", help="New station name")

    delete_parser = subparsers.add_parser(
        "delete", help="Delete a pipe or station and save"
    )
    delete_parser.add_argument("kind", choices=["pipe", "station"], help="Record type")
    delete_parser.add_argument("record_id", type=int, help="Record ID")

    search_parsers = _build_search_parser(subparsers)

    path_parser = subparsers.add_parser("path", help="Shortest path between stations")
    path_parser.add_argument("start", type=int, help="Start station ID")
    path_parser.add_argument("end", type=int, help="End station ID")

    flow_parser = subparsers.add_parser("flow", help="Maximum flow between stations")
    flow_parser.add_argument("source", type=int, help="Source station ID")
    flow_parser.add_argument("sink", type=int, help="Sink station ID")

    topo_parser = subparsers.add_parser("topo", help="Topological order of stations")

    connect_parser = subparsers.add_parser(
        "connect", help="Connect two stations with a pipe and save"
    )
    connect_parser.add_argument("source", type=int, help="Source station ID")
    connect_parser.add_argument("dest", type=int, help="Destination station ID")
    connect_parser.add_argument(
        "--diameter", "-d", type=int, required=True, help="Pipe diameter (mm)"
    )
    connect_parser.add_argument(
        "--length",
        "-l",
        type=float,
        default=None,
        help="Length (km) of a new pipe if no free pipe is available",
    )
    connect_parser.add_argument(
        "--km-mark", default="", help="Kilometre mark of a newly created pipe"
    )
    connect_parser.add_argument(
        "--repair", action="store_true", help="Create the new pipe under repair"
    )

    disconnect_parser = subparsers.add_parser(
        "disconnect", help="Unlink a pipe from its stations and save"
    )
    disconnect_parser.add_argument("pipe_id", type=int, help="Pipe ID")

    query_parsers = [path_parser, flow_parser, topo_parser] + search_parsers
    all_parsers = [
        inspect_parser,
        add_station_parser,
        add_pipe_parser,
        repair_parser,
        rename_parser,
        delete_parser,
        connect_parser,
        disconnect_parser,
    ] + query_parsers
    for p in all_parsers:
        p.add_argument(
            "--file",
            "-f",
            type=Path,
            default=None,
            help="Network YAML file (default: network.yaml)",
        )
    for p in query_parsers:
        p.add_argument("--json", action="store_true", help="Print JSON output")

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    path: Path = args.file or Path(NETWORK_CONFIG.default_data_file)
    if path.exists():
        try:
            network = load_network(path)
        except Exception as e:
            logger.error("Failed to load network %s: %s", path, e)
            print(f"Error: failed to load network {path}")
            print(f"  {type(e).__name__}: {e}")
            raise SystemExit(1) from e
    elif args.command in _CREATES_FILE:
        logger.info("Network file %s not found; starting a new network", path)
        network = GasNetwork()
    else:
        print(f"Error: network file {path} not found")
        raise SystemExit(1)

    if args.command == "inspect":
        _inspect(network)
    elif args.command == "add-station":
        _add_station(path, network, args)
    elif args.command == "add-pipe":
        _add_pipe(path, network, args)
    elif args.command == "repair":
        _repair(path, network, args.pipe_id, args.state)
    elif args.command == "rename":
        _rename(path, network, args.station_id, args.name)
    elif args.command == "delete":
        _delete(path, network, args.kind, args.record_id)
    elif args.command == "search":
        _search(network, args)
    elif args.command == "path":
        _path(network, args.start, args.end, args.json)
    elif args.command == "flow":
        _flow(network, args.source, args.sink, args.json)
    elif args.command == "topo":
        _topo(network, args.json)
    elif args.command == "connect":
        _connect(
            path,
            network,
            args.source,
            args.dest,
            args.diameter,
            args.length,
            args.km_mark,
            args.repair,
        )
    elif args.command == "disconnect":
        _disconnect(path, network, args.pipe_id)


if __name__ == "__main__":
    main()
