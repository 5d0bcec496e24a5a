# Guardian Vision API
# Combines Auth, Emergency Contacts, Alerts, User Settings, Emergency Alert and Frame Analysis features

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guardian import config
from guardian.db import Database
from guardian.errors import register_error_handlers
from guardian.routes import alerts, analyze_frame, auth, contacts, emergency_alert, user_settings


def configure_logging():
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


configure_logging()
logger = logging.getLogger("guardian")


def create_app(database: Database = None) -> FastAPI:
    """Build the API around one Database handle; requests get a 503 until it is ready."""
    # a handle passed in by the caller is the caller's to dispose
    owns_database = database is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = app.state.database
        if not db.ready:
            db.init()
        logger.info("Guardian Vision backend ready")
        yield
        if owns_database:
            db.dispose()

    app = FastAPI(
        title="Guardian Vision API",
        version="1.0",
        description="Backend API for harassment detection: accounts, emergency contacts, alert log, settings and frame analysis",
        lifespan=lifespan,
    )
    app.state.database = database or Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "message": "Server is running", "database_ready": app.state.database.ready}

    # Include API routers
    app.include_router(auth.router)
    app.include_router(contacts.router)
    app.include_router(alerts.router)
    app.include_router(user_settings.router)
    app.include_router(emergency_alert.router)
    app.include_router(analyze_frame.router)
    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=3001)
