import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.config import settings
from .core.errors import register_error_handlers
from .core.log_config import configure_logging
from .db.session import get_database
from .routers import health, locations, users

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    db = get_database()
    db.create_all()
    logger.info("%s (%s) listo; base de datos %s", settings.app_name, settings.app_env, db.engine.url.render_as_string(hide_password=True))
    yield

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(users.router)
app.include_router(locations.router)
app.include_router(health.router)

@app.get("/")
def root():
    return {"name": settings.app_name, "env": settings.app_env, "message": "OK"}
