# asnwho/services/__init__.py

from .lookup import LookupResult, LookupService, RegistryClient
from .rdap import RdapClient, classify_query
from .summary import build_summary
from .vcard import ContactScan, extract_name, scan_contacts

__all__ = [
    "LookupResult",
    "LookupService",
    "RegistryClient",
    "RdapClient",
    "classify_query",
    "build_summary",
    "ContactScan",
    "extract_name",
    "scan_contacts",
]
