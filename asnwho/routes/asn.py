import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from asnwho.errors import (
    AsnWhoError,
    InvalidLookupKeyError,
    InvalidQueryError,
    NotFoundError,
    RegistryClientError,
)
from asnwho.deps import get_lookup_service
from asnwho.models import AsnSummary
from asnwho.services.lookup import LookupService

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_flag(value: Optional[str]) -> bool:
    return value in ("true", "1")


def _status_for(exc: AsnWhoError) -> int:
    if isinstance(exc, (InvalidLookupKeyError, InvalidQueryError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, RegistryClientError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get(
    "/asn/{as_number}",
    response_model=AsnSummary,
    tags=["Contacts"],
    summary="Registrant and administrative contacts of an AS",
    responses={
        400: {"description": "The lookup key is not an AS number or IP address"},
        404: {"description": "The registry has no record for the key"},
        502: {"description": "The registry could not be reached or answered badly"},
    },
)
async def asn_contacts(
    as_number: str,
    no_cache: Optional[str] = Query(
        None,
        description="Set to `true` or `1` to skip the response cache",
    ),
    service: LookupService = Depends(get_lookup_service),
):
    """Return the registrant and administrative contact names of ``as_number``."""

    try:
        return await service.summarize(as_number, bypass_cache=_parse_flag(no_cache))
    except AsnWhoError as exc:
        code = _status_for(exc)
        if code >= 500:
            logger.error("Lookup for %s failed: %s", as_number, exc)
        raise HTTPException(status_code=code, detail=f"Error: {exc}") from exc
