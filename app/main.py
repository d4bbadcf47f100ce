import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError

from app.api.rest_routes.auth import router as auth_router
from app.api.rest_routes.categories import router as categories_router
from app.api.rest_routes.farmer_profile import router as farmer_profile_router
from app.api.rest_routes.files import router as files_router
from app.api.rest_routes.pages import router as pages_router
from app.api.rest_routes.products import router as products_router
from app.core.config import settings
from app.core.exceptions import (
    AppError,
    app_error_handler,
    request_validation_error_handler,
    unhandled_error_handler,
)
from app.core.mongodb import MongoStore
from app.core.route_guard import RouteGuardMiddleware
from app.services.files import BlobUploader

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = MongoStore.from_settings()
    await store.ensure_indexes()
    uploader = BlobUploader()
    app.state.store = store
    app.state.uploader = uploader
    logger.info("Fresh Harvest Connect started")
    yield
    await uploader.close()
    store.close()


app = FastAPI(title="Fresh Harvest Connect", lifespan=lifespan)

app.add_middleware(RouteGuardMiddleware)
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(auth_router)
api_router.include_router(categories_router)
api_router.include_router(products_router)
api_router.include_router(farmer_profile_router)
api_router.include_router(files_router)

app.include_router(api_router)
app.include_router(pages_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Fresh Harvest Connect!"}
