"""YAML load/save for gas networks.

Network file layout::

    stations:
      - {id: 1, name: North, workshop_count: 4, workshop_working: 3,
         classification: A, working: true}
    pipes:
      - {id: 10, km_mark: "km 12", length: 100, diameter: 700,
         under_repair: false, source: 1, dest: 2}

Ids are preserved on load and list order becomes enumeration order. A
``source``/``dest`` of 0 (or absent) means the pipe is free.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml

from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.logging import get_logger
from gasnet.model.entities import UNCONNECTED, Pipe, Station
from gasnet.network import GasNetwork

logger = get_logger(__name__)


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("gasnet.schemas")
            .joinpath("network.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged network schema 'gasnet/schemas/network.json'."
        ) from exc


def load_network_yaml(
    yaml_str: str, config: NetworkConfig = NETWORK_CONFIG
) -> GasNetwork:
    """Parse and validate a network YAML document.

    Args:
        yaml_str: YAML text.
        config: Configuration for the resulting network.

    Returns:
        A populated ``GasNetwork``.

    Raises:
        ValueError: If the document is not a mapping, or records are
            inconsistent (duplicate ids, disallowed diameters, half-linked
            pipes, references to unknown stations).
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    jsonschema.validate(data, _load_schema())

    network = GasNetwork(config)
    for entry in data.get("stations", []):
        network.stations.add_existing(
            Station(
                id=entry["id"],
                name=entry.get("name", ""),
                workshop_count=entry.get("workshop_count", 0),
                workshop_working=entry.get("workshop_working", 0),
                classification=entry.get("classification", ""),
                working=entry.get("working", True),
            )
        )

    for entry in data.get("pipes", []):
        pipe = Pipe(
            id=entry["id"],
            km_mark=entry.get("km_mark", ""),
            length=entry["length"],
            diameter=entry["diameter"],
            under_repair=entry.get("under_repair", False),
            source_station_id=entry.get("source", UNCONNECTED),
            dest_station_id=entry.get("dest", UNCONNECTED),
        )
        for end in (pipe.source_station_id, pipe.dest_station_id):
            if end != UNCONNECTED and end not in network.stations:
                raise ValueError(f"Pipe {pipe.id} references unknown station {end}")
        network.pipes.add_existing(pipe)

    logger.debug(
        "Loaded network: %d stations, %d pipes",
        len(network.stations),
        len(network.pipes),
    )
    return network


def dump_network_yaml(network: GasNetwork) -> str:
    """Serialize ``network`` to YAML in the layout ``load_network_yaml`` reads."""
    data = {
        "stations": [station.to_dict() for station in network.stations],
        "pipes": [
            {
                "id": pipe.id,
                "km_mark": pipe.km_mark,
                "length": pipe.length,
                "diameter": pipe.diameter,
                "under_repair": pipe.under_repair,
                "source": pipe.source_station_id,
                "dest": pipe.dest_station_id,
            }
            for pipe in network.pipes
        ],
    }
    return yaml.safe_dump(data, sort_keys=False)


def load_network(
    path: Union[str, Path], config: NetworkConfig = NETWORK_CONFIG
) -> GasNetwork:
    """Load a network from a YAML file."""
    path = Path(path)
    network = load_network_yaml(path.read_text(encoding="utf-8"), config)
    logger.debug("Loaded network from %s", path)
    return network


def save_network(network: GasNetwork, path: Union[str, Path]) -> None:
    """Write ``network`` to a YAML file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_network_yaml(network), encoding="utf-8")
    logger.info("Saved network to %s", path)
