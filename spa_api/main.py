import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from spa_api.core.config import settings
from spa_api.core.errors import InvalidRange, InvalidRecord, NotFound
from spa_api.db.mongo import connect_to_mongo, disconnect_from_mongo
from spa_api.api.v1.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await disconnect_from_mongo()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(InvalidRange)
async def invalid_range_handler(request: Request, exc: InvalidRange):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(InvalidRecord)
async def invalid_record_handler(request: Request, exc: InvalidRecord):
    logger.warning(f"Rejected request on bad {exc.kind} record {exc.record_id}: {exc.reason}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "record_id": exc.record_id},
    )


@app.get("/")
async def root():
    return {"message": "Welcome to Spa Settlement API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
