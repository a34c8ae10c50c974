"""Pydantic schemas for validating exported canonical graph documents."""

import json
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..exceptions import DiagramFormatError


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, value: Any) -> Any:
        # editor snapshots may carry numeric ids; the diagram parser reads them as strings too
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class EndpointRef(_Record):
    pass


class RoomRecord(_Record):
    type: Literal["Room"]
    x: float
    y: float
    label: str = ""


class VertexRecord(_Record):
    type: Literal["Vertex"]
    x: float
    y: float


# extra="forbid" keeps waypoint arrays out of the exported form
class EdgeRecord(_Record):
    type: Literal["Edge"]
    source: EndpointRef
    target: EndpointRef


Record = Annotated[Union[RoomRecord, VertexRecord, EdgeRecord], Field(discriminator="type")]


class CanonicalDocument(BaseModel):
    cells: List[Record]

    @model_validator(mode="after")
    def check_references(self) -> "CanonicalDocument":
        ids = set()
        for cell in self.cells:
            if cell.id in ids:
                raise ValueError(f"duplicate cell id {cell.id!r}")
            ids.add(cell.id)
        for cell in self.cells:
            if isinstance(cell, EdgeRecord):
                for end in (cell.source.id, cell.target.id):
                    if end not in ids:
                        raise ValueError(f"edge {cell.id!r} references unknown cell {end!r}")
        return self

    def canonical_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2, ensure_ascii=False)


def validate_document_json(payload: Any) -> CanonicalDocument:
    data: Dict[str, Any]
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DiagramFormatError(f"Export document is not valid JSON: {exc}") from exc
    else:
        data = payload
    if not isinstance(data, dict):
        raise DiagramFormatError("Export document must be an object with a 'cells' list")
    try:
        return CanonicalDocument(**data)
    except ValidationError as exc:
        raise DiagramFormatError(f"Invalid export document: {exc}") from exc
