import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import dispose_db, init_db
from api.admin import router as admin_router
from api.client import router as client_router
from api.files import router as files_router
from services.errors import OnboardingError

logging.basicConfig(
    level=settings.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Record store ready (%s)", settings.database_url.split(":")[0])
    yield
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    description="Client onboarding, registration and credit application API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OnboardingError)
async def onboarding_exception_handler(request: Request, exc: OnboardingError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.content)


app.include_router(admin_router)
app.include_router(client_router)
app.include_router(files_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
