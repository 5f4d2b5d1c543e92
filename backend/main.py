import logging
from fastapi import FastAPI, APIRouter
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

from backend.core import config
from backend.core.database import Store
from backend.core.errors import register_exception_handlers
from backend.core.seed import seed_defaults
from backend.routers import items, logistics, rooms, settings, priorities
from backend.schemas.schemas import HealthModel

logger = logging.getLogger(__name__)


def create_app(database_url: str = None, seed: bool = None, api_prefix: str = None) -> FastAPI:
  """
  Build the House Planner API.
  Arguments default to the values in backend.core.config.
  """
  store = Store(database_url or config.DATABASE_URL)
  seed = config.SEED_DEFAULTS if seed is None else seed
  api_prefix = config.API_PREFIX if api_prefix is None else api_prefix

  @asynccontextmanager
  async def lifespan(app: FastAPI):
    logger.info("Application startup: opening store...")
    store.open()
    if seed:
      seeded = seed_defaults(store)
      if seeded:
        logger.info(f"Seeded defaults: {', '.join(seeded)}")
    yield
    logger.info("Application shutdown: closing store...")
    store.close()

  app = FastAPI(title="House Planner API", lifespan=lifespan)
  app.state.store = store

  app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
  )
  register_exception_handlers(app)

  api = APIRouter(prefix=api_prefix)
  api.include_router(items.router)
  api.include_router(logistics.router)
  api.include_router(rooms.router)
  api.include_router(settings.router)
  api.include_router(priorities.router)

  @api.get("/health", response_model=HealthModel)
  def health():
    return {"status": "ok", "message": "House Planner API is running"}

  app.include_router(api)
  return app


config.configure_logging()
app = create_app()
