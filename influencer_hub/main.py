import uuid
import logging
import datetime
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .db import engine
from .models import Base
from .routes import auth, social_connections, posts, content, collaborations, voice, avatar
from .config import settings
from .logging_setup import setup_logging, request_id_var, log_event
from .services.uploads import ensure_uploads_dir

setup_logging()
logger = logging.getLogger(__name__)

if not settings.openai_api_key:
    logger.warning("STARTUP WARNING: OPENAI_API_KEY is not set; content generation will fail.")
if settings.secret_key == "change-me-in-production-for-jwt":
    logger.warning("STARTUP WARNING: JWT_SECRET is using the default insecure key.")
if settings.demo_auto_login:
    logger.warning("STARTUP WARNING: DEMO_AUTO_LOGIN is enabled; anyone can sign in as the demo profile.")

app = FastAPI(title="AI Influencer Hub")
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type", "x-request-id"],
)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    token = request_id_var.set(req_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-Id"] = req_id
    return response

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal Server Error: {str(exc)}", "type": type(exc).__name__},
    )

@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "version": "0.1.0",
        "now": datetime.datetime.now(datetime.timezone.utc).isoformat()
    }

@app.get("/ready")
def readiness_check():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT id FROM profiles LIMIT 1"))
        return {"status": "ready"}
    except Exception:
        return JSONResponse(status_code=503, content={"status": "not_ready", "detail": "Database tables missing or DB unreachable."})

# Serve uploads
ensure_uploads_dir()
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")

app.include_router(auth.router)
app.include_router(social_connections.router)
app.include_router(posts.router)
app.include_router(content.router)
app.include_router(collaborations.router)
app.include_router(voice.router)
app.include_router(avatar.router)

@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    log_event("startup", database=engine.url.get_backend_name(), demo_auto_login=settings.demo_auto_login)
