import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from dotenv import load_dotenv

from app.routes import auth, companies, jobs, keywords, scrape
from core.database import init_db

# Ensure .env values are loaded even if uvicorn is launched without `dotenv run`.
load_dotenv(override=True)

log = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("DATABASE_URL"):
        init_db()
    else:
        log.warning("DATABASE_URL not set; skipping schema init")
    yield


app = FastAPI(lifespan=lifespan)


app.include_router(scrape.router)
app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(keywords.router)
app.include_router(jobs.router)


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
    return response
