"""
HTTP trigger for a scrape run (dashboard button or an external scheduler).
"""
import hmac
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from worker import config
from worker.orchestrator import build_orchestrator

router = APIRouter()
log = logging.getLogger("scraper")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _authorized(request: Request) -> bool:
    expected = config.SCRAPER_TRIGGER_TOKEN
    if not expected:
        return True
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return False
    return hmac.compare_digest(token.strip(), expected)


@router.options("/functions/job-scraper")
@router.options("/api/scrape")
def scrape_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/functions/job-scraper")
@router.post("/api/scrape")
async def trigger_scrape(request: Request):
    if not _authorized(request):
        return JSONResponse({"success": False, "error": "Unauthorized"}, status_code=401, headers=CORS_HEADERS)

    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    manual = bool(payload.get("manual")) if isinstance(payload, dict) else False
    log.info("Scrape triggered", extra={"manual": manual})

    try:
        summary = await build_orchestrator().run()
    except Exception as e:
        log.exception("Scrape run failed")
        return JSONResponse({"success": False, "error": str(e)}, status_code=500, headers=CORS_HEADERS)

    return JSONResponse(summary.to_dict(), status_code=200, headers=CORS_HEADERS)
