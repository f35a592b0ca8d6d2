"""Contact-name extraction from RDAP jCard arrays.

A jCard (``vcardArray``) looks like::

    ["vcard", [
        ["version", {}, "text", "4.0"],
        ["fn", {}, "text", "Example Org"],
        ["kind", {}, "text", "org"],
    ]]

Only the ``fn`` and ``kind`` properties matter here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple

from asnwho.models import Entity, ExtractionResult

REGISTRANT = "registrant"
ADMINISTRATIVE = "administrative"


def iter_properties(vcard: Any) -> Iterator[Tuple[str, str]]:
    """Yield ``(name, value)`` for every string-valued jCard property.

    Walks two levels: outer groups, then the entries inside each group. An
    entry counts only when it is a list of exactly four elements whose first
    and last elements are strings; parameters and value type are ignored.
    """

    if not isinstance(vcard, list):
        return
    for group in vcard:
        if not isinstance(group, list):
            continue
        for entry in group:
            if not isinstance(entry, list) or len(entry) != 4:
                continue
            name, value = entry[0], entry[3]
            if isinstance(name, str) and isinstance(value, str):
                yield name, value


def extract_name(vcard: Any) -> Optional[ExtractionResult]:
    """Return the display name and organisation flag of one contact.

    The last ``fn`` wins, and a ``kind`` of ``org`` anywhere in the card marks
    it as an organisation. Cards without ``fn`` give ``None``.
    """

    name: Optional[str] = None
    is_org = False
    for key, value in iter_properties(vcard):
        if key == "fn":
            name = value
        elif key == "kind" and value == "org":
            is_org = True

    if name is None:
        return None
    return ExtractionResult(name=name, is_org=is_org)


def _prefer(
    current: Optional[ExtractionResult],
    candidate: Optional[ExtractionResult],
) -> Optional[ExtractionResult]:
    if current is None:
        return candidate
    if not current.is_org and candidate is not None and candidate.is_org:
        return candidate
    return current


def _is_org(result: Optional[ExtractionResult]) -> bool:
    return result is not None and result.is_org


@dataclass(frozen=True)
class ContactScan:
    registrant: Optional[ExtractionResult] = None
    administrative: Optional[ExtractionResult] = None


def scan_contacts(entities: Iterable[Entity]) -> ContactScan:
    """Pick the registrant and administrative contact among ``entities``.

    The first contact found for a role is kept unless a later one is an
    organisation while the kept one is not. Iteration stops as soon as both
    roles hold an organisation.
    """

    registrant: Optional[ExtractionResult] = None
    administrative: Optional[ExtractionResult] = None

    for entity in entities:
        if entity.vcard_array is not None:
            if entity.has_role(REGISTRANT):
                registrant = _prefer(registrant, extract_name(entity.vcard_array))
            if entity.has_role(ADMINISTRATIVE):
                administrative = _prefer(
                    administrative, extract_name(entity.vcard_array)
                )

        if _is_org(registrant) and _is_org(administrative):
            break

    return ContactScan(registrant=registrant, administrative=administrative)
