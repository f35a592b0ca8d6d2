"""RDAP response types and the records derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from asnwho.errors import MalformedResponseError

AUTNUM_CLASS = "autnum"


class Entity(BaseModel):
    """An RDAP entity attached to a resource (a contact record)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    handle: Optional[str] = None
    roles: Optional[List[str]] = None
    vcard_array: Optional[Any] = Field(default=None, alias="vcardArray")

    def has_role(self, role: str) -> bool:
        return bool(self.roles) and role in self.roles


class Autnum(BaseModel):
    """RDAP ``autnum`` object. Members not modelled here are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    object_class_name: Literal["autnum"] = Field(
        default=AUTNUM_CLASS, alias="objectClassName"
    )
    handle: Optional[str] = None
    entities: Optional[List[Entity]] = None


class OtherResponse(BaseModel):
    """Any RDAP object other than an autnum, kept as raw JSON."""

    object_class_name: Optional[str] = None
    payload: Dict[str, Any]


RegistryResponse = Union[Autnum, OtherResponse]


def parse_response(payload: Any) -> RegistryResponse:
    """Build a :data:`RegistryResponse` from decoded RDAP JSON."""

    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    class_name = payload.get("objectClassName")
    if class_name == AUTNUM_CLASS:
        try:
            return Autnum.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"Invalid autnum object: {exc}") from exc

    return OtherResponse(
        object_class_name=class_name if isinstance(class_name, str) else None,
        payload=payload,
    )


def dump_response(response: RegistryResponse) -> Dict[str, Any]:
    """Return the RDAP JSON form of ``response``."""

    if isinstance(response, Autnum):
        data = response.model_dump(mode="json", by_alias=True, exclude_unset=True)
        data.setdefault("objectClassName", AUTNUM_CLASS)
        return data
    return response.payload


@dataclass(frozen=True)
class CachedEntry:
    response: RegistryResponse
    fetched_at: str


@dataclass(frozen=True)
class ExtractionResult:
    name: str
    is_org: bool


class AsnSummary(BaseModel):
    handle: str
    registrant: Optional[str] = None
    administrative: Optional[str] = None
    fetched_at: str
