import logging

from config import load_settings

settings = load_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

if not settings.checkwx_api_key:
    logger.warning("Missing environment variable: CHECKWX_API_KEY")
    logger.warning("METAR lookups will fail until it is set")

logger.info("🔧 Environment Check:")
logger.info(f"   CHECKWX_API_KEY: {'✅' if settings.checkwx_api_key else '❌ MISSING'}")
logger.info(f"   CHECKWX_BASE_URL: {settings.checkwx_base_url}")

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from models.response import MetarReport, FlightCategoryResult
from services.weather import CheckWxClient, CheckWxError
from services.metar_decoder import flight_category_tag

SERVICE_NAME = "METAR Decoder"
VERSION = "1.0.0"

app = FastAPI(
    title=SERVICE_NAME,
    description="Decoded aviation weather (METAR) with flight category and density altitude",
    version=VERSION,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)

_client = None


def get_client() -> CheckWxClient:
    global _client
    if _client is None:
        _client = CheckWxClient(settings)
    return _client


@app.get("/")
@app.head("/")
def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "checkwx_configured": bool(settings.checkwx_api_key),
    }


@app.get("/metar/{icao}", response_model=MetarReport)
def get_metar(icao: str, client: CheckWxClient = Depends(get_client)):
    """Latest METAR for a station, decoded for display."""
    logger.info(f"📡 METAR request for {icao}")
    try:
        summary = client.decode(icao)
    except CheckWxError as e:
        logger.error(f"❌ METAR error for {icao}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return MetarReport(
        **summary.model_dump(),
        flight_category_tag=flight_category_tag(summary.flight_category),
    )


@app.get("/metar/{icao}/flight-category", response_model=FlightCategoryResult)
def get_flight_category(icao: str, client: CheckWxClient = Depends(get_client)):
    try:
        category = client.fetch_flight_category(icao)
    except CheckWxError as e:
        logger.error(f"❌ Flight category error for {icao}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))

    category = category or "Unknown"
    return FlightCategoryResult(
        icao=icao.strip().upper(),
        flight_category=category,
        tag=flight_category_tag(category),
    )
