from __future__ import annotations

from asnwho.models import AsnSummary, Autnum, RegistryResponse
from asnwho.services.vcard import scan_contacts

PLACEHOLDER_HANDLE = "N/A"


def build_summary(response: RegistryResponse, fetched_at: str) -> AsnSummary:
    """Project an RDAP response onto the public summary record.

    Only autnum objects are understood; any other object class gives the
    placeholder handle and no contacts.
    """

    if not isinstance(response, Autnum):
        return AsnSummary(handle=PLACEHOLDER_HANDLE, fetched_at=fetched_at)

    scan = scan_contacts(response.entities or [])
    handle = response.handle if response.handle is not None else PLACEHOLDER_HANDLE
    return AsnSummary(
        handle=handle,
        registrant=scan.registrant.name if scan.registrant else None,
        administrative=scan.administrative.name if scan.administrative else None,
        fetched_at=fetched_at,
    )
