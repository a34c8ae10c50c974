import json
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import DiagramFormatError
from ..geometry.primitives import Point
from ..utils.logger import get_logger
from .schema import Cell, RawConnector, RawDiagram, Room, Vertex

logger = get_logger(__name__)

ROOM_TYPES = {"Room", "RoomPoint", "devs.Model"}
VERTEX_TYPES = {"Vertex"}
CONNECTOR_TYPES = {"Connector", "Link", "devs.Link", "Edge"}

ROOM_TAG_SEPARATOR = "__"


def room_label_from_tag(tag: str) -> str:
    """
    Room label carried by a `data-room` tag such as "floor2__Room-101".
    Tags without the separator are already labels.
    """
    if ROOM_TAG_SEPARATOR not in tag:
        return tag
    return tag.split(ROOM_TAG_SEPARATOR)[1]


def _normalize_endpoint_keys(cell: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert endpoint synonyms into 'source'/'target' objects.
    Accepts 'from'/'to' and 'source_id'/'target_id' (plain ids or objects).
    """
    normalized = dict(cell)
    for key, synonyms in (("source", ("from", "source_id", "sourceId")), ("target", ("to", "target_id", "targetId"))):
        if key not in normalized:
            for alt in synonyms:
                if alt in normalized:
                    normalized[key] = normalized.pop(alt)
                    break
        value = normalized.get(key)
        if value is None or isinstance(value, (str, int)):
            normalized[key] = {"id": value}
        elif not isinstance(value, dict):
            raise DiagramFormatError(f"Connector {cell.get('id')!r} has a malformed {key}: {value!r}")
    return normalized


def _point(raw: Any, what: str) -> Point:
    if isinstance(raw, dict):
        x, y = raw.get("x"), raw.get("y")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        x, y = raw
    else:
        raise DiagramFormatError(f"{what} is not a point: {raw!r}")
    try:
        return Point(float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise DiagramFormatError(f"{what} has non-numeric coordinates: {raw!r}") from exc


def _optional_point(raw: Any, what: str) -> Optional[Point]:
    if raw is None:
        return None
    return _point(raw, what)


def _cell_position(cell: Dict[str, Any]) -> Point:
    if "position" in cell:
        return _point(cell["position"], f"Position of {cell.get('id')!r}")
    return _point({"x": cell.get("x"), "y": cell.get("y")}, f"Position of {cell.get('id')!r}")


def _room_label(cell: Dict[str, Any]) -> str:
    if cell.get("label") is not None:
        return str(cell["label"])
    attrs = cell.get("attrs") or {}
    if not isinstance(attrs, dict):
        raise DiagramFormatError(f"Room {cell.get('id')!r} has malformed attrs: {attrs!r}")
    label_attrs = attrs.get(".label") or {}
    if not isinstance(label_attrs, dict):
        raise DiagramFormatError(f"Room {cell.get('id')!r} has a malformed .label attr: {label_attrs!r}")
    text = label_attrs.get("text")
    if text is not None:
        return str(text)
    if cell.get("room") is not None:
        return room_label_from_tag(str(cell["room"]))
    return ""


def _parse_connector(cell: Dict[str, Any]) -> RawConnector:
    c = _normalize_endpoint_keys(cell)
    waypoints_raw = c.get("vertices")
    if waypoints_raw is None:
        waypoints_raw = c.get("waypoints") or []
    cid = str(c["id"])
    if not isinstance(waypoints_raw, (list, tuple)):
        raise DiagramFormatError(f"Waypoints of connector {cid!r} are not a list: {waypoints_raw!r}")
    waypoints: Tuple[Point, ...] = tuple(
        _point(w, f"Waypoint {i} of connector {cid!r}") for i, w in enumerate(waypoints_raw)
    )
    source, target = c["source"], c["target"]
    return RawConnector(
        id=cid,
        source_id=None if source.get("id") is None else str(source["id"]),
        target_id=None if target.get("id") is None else str(target["id"]),
        waypoints=waypoints,
        source_point=_optional_point(source.get("point"), f"Source point of {cid!r}"),
        target_point=_optional_point(target.get("point"), f"Target point of {cid!r}"),
    )


def parse_cell(cell: Dict[str, Any]) -> Optional[Cell]:
    if not isinstance(cell, dict):
        raise DiagramFormatError(f"Cell is not an object: {cell!r}")
    if cell.get("id") is None:
        raise DiagramFormatError(f"Cell without an id: {cell!r}")
    ctype = cell.get("type")
    if not isinstance(ctype, str):
        raise DiagramFormatError(f"Cell {cell.get('id')!r} has a non-string type: {ctype!r}")
    if ctype in CONNECTOR_TYPES:
        return _parse_connector(cell)
    if ctype in VERTEX_TYPES:
        return Vertex(id=str(cell["id"]), position=_cell_position(cell))
    if ctype in ROOM_TYPES:
        return Room(id=str(cell["id"]), label=_room_label(cell), anchor=_cell_position(cell))
    logger.info("Skipping cell %s of unsupported type %r", cell.get("id"), ctype)
    return None


def parse_diagram_json(raw_json: Union[str, Dict[str, Any]]) -> RawDiagram:
    """
    Parse an editor snapshot document ({"cells": [...]}) into a RawDiagram.
    """
    data: Any
    if isinstance(raw_json, str):
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            raise DiagramFormatError(f"Diagram is not valid JSON: {exc}") from exc
    else:
        data = raw_json

    if not isinstance(data, dict) or not isinstance(data.get("cells"), list):
        raise DiagramFormatError("Diagram document must be an object with a 'cells' list")

    cells: List[Cell] = []
    for raw_cell in data["cells"]:
        cell = parse_cell(raw_cell)
        if cell is not None:
            cells.append(cell)
    return RawDiagram(cells)


def load_diagram(path: str) -> RawDiagram:
    with open(path, "r", encoding="utf-8") as f:
        return parse_diagram_json(f.read())
