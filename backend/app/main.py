from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import configure_logging, logger
from app.api.errors import add_exception_handlers
from app.api.middleware import RequestIDMiddleware
from app.api.router import api_router
from app.db.session import engine
from app.db.base import Base
from app.services.events.bus import EventBus
from app.services.events.listeners import register_default_listeners
from app.services.events.publisher import EventPublisher, make_publisher
from app.services.seed import seed_demo

def create_app(publisher: EventPublisher | None = None, event_bus: EventBus | None = None) -> FastAPI:
    configure_logging(settings.ENV)
    app = FastAPI(title="Project Work Items API", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)
    add_exception_handlers(app)

    if event_bus is None:
        event_bus = EventBus()
        register_default_listeners(event_bus)
    app.state.event_bus = event_bus
    app.state.publisher = publisher or make_publisher()

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        # Ensure tables exist for dev-only convenience; in prod rely on alembic
        if settings.ENV == "dev":
            Base.metadata.create_all(bind=engine)
        if settings.SEED_DEMO and settings.ENV == "dev":
            seed_demo()

    @app.on_event("shutdown")
    def _shutdown():
        close = getattr(app.state.publisher, "close", None)
        if close:
            close()

    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()
