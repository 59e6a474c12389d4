import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from lab_monitor.config.settings import settings
from lab_monitor.modules.auth import routes as auth_routes
from lab_monitor.modules.profiles import routes as profiles_routes
from lab_monitor.modules.labs import routes as labs_routes
from lab_monitor.modules.lab_requests import routes as lab_requests_routes
from lab_monitor.modules.issues import routes as issues_routes
from lab_monitor.modules.dashboard import routes as dashboard_routes
from lab_monitor.realtime.change_feed import change_feed

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(profiles_routes.router, prefix="/api/v1")
app.include_router(labs_routes.router, prefix="/api/v1")
app.include_router(lab_requests_routes.router, prefix="/api/v1")
app.include_router(issues_routes.router, prefix="/api/v1")
app.include_router(dashboard_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if settings.realtime_enabled:
        change_feed.start()
        logger.info("Realtime change feed started")


@app.on_event("shutdown")
async def shutdown_event():
    await change_feed.stop()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {
        "message": "Welcome to Lab Monitor",
        "description": "Monitor lab availability, manage requests and report issues in real-time",
        "status": "healthy",
    }


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness check; reports whether the realtime change feed is connected when enabled."""
    if settings.realtime_enabled and not change_feed.connected:
        return JSONResponse(status_code=503, content={"status": "starting", "realtime": "disconnected"})
    return {"status": "ready"}
