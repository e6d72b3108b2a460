# habitquest/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import load_settings
from .db.mongo import Stores
from .exceptions import HabitQuestException

# Routers
from .routes.achievements import router as achievements_router
from .routes.goals import router as goals_router
from .routes.reports import router as reports_router
from .routes.users import router as users_router

logger = logging.getLogger("habitquest")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))


def create_app(stores: Optional[Stores] = None) -> FastAPI:
    """
    Build the API. Tests pass their own `stores`; in production they are
    created from the environment at startup, and a missing MONGODB_URL or an
    unreachable database stops the process.
    """
    app = FastAPI(title="HabitQuest Backend", version="1.0.0")
    app.state.stores = stores

    # CORS: the mini-app is served from Telegram's webview and ngrok tunnels
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "ngrok-skip-browser-warning"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("[%s] %s from %s", request.method, request.url.path, request.headers.get("origin"))
        return await call_next(request)

    # ---------------------------
    # Error mapping: {"error": message}
    # ---------------------------
    @app.exception_handler(HabitQuestException)
    async def habitquest_exception_handler(request: Request, exc: HabitQuestException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Error in %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/test")
    async def liveness():
        return {"message": "Server is running"}

    # ---------------------------
    # Routers
    # ---------------------------
    app.include_router(users_router)
    app.include_router(goals_router)
    app.include_router(achievements_router)
    app.include_router(reports_router)

    # ---------------------------
    # Startup / shutdown
    # ---------------------------
    @app.on_event("startup")
    async def on_startup():
        if app.state.stores is None:
            settings = load_settings()
            configure_logging(settings.log_level)
            app.state.stores = Stores.from_settings(settings)
            await app.state.stores.ping()
        await app.state.stores.init_indexes()
        logger.info("HabitQuest API started")

    @app.on_event("shutdown")
    async def on_shutdown():
        if app.state.stores is not None:
            app.state.stores.close()
        logger.info("Shutting down HabitQuest API")

    return app


# ---------------------------
# Final ASGI app export
# ---------------------------
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run("habitquest.main:app", host="0.0.0.0", port=settings.port, reload=False)
