from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from asnwho import __version__
from asnwho.middleware import log_requests
from asnwho.routes import asn, health
from asnwho.services.rdap import RdapClient
from asnwho.settings import get_settings

logger = logging.getLogger("asnwho")


API_DESCRIPTION = (
    "asnwho answers who is responsible for an autonomous system. It queries "
    "the authoritative RDAP registry, located through the IANA bootstrap "
    "files, extracts the registrant and administrative contact names, and "
    "keeps the raw registry answer on disk for later requests."
)

OPENAPI_TAGS = [
    {
        "name": "Contacts",
        "description": "Registrant and administrative contacts per AS number.",
    },
    {
        "name": "Service",
        "description": "Operational endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )
    logger.setLevel(settings.log_level.upper())
    for w in settings.recommended_warnings():
        logger.warning("CONFIG: %s", w)

    app.state.registry_client = RdapClient()
    logger.info("Caching RDAP responses under %s", settings.data_dir)
    yield


app = FastAPI(
    title="asnwho",
    description=API_DESCRIPTION,
    version=__version__,
    default_response_class=JSONResponse,
    lifespan=lifespan,
    license_info={"name": "MIT License",
                  "url": "https://opensource.org/licenses/MIT"},
    openapi_tags=OPENAPI_TAGS,
)

# Middleware
app.middleware("http")(log_requests)

# Routers
app.include_router(asn.router)
app.include_router(health.router)
