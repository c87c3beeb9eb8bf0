"""Community admin API: lookup-table CRUD, access profiles and health under API_V1_PREFIX."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings

app = FastAPI(
    title="Community Admin API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Entry points of the admin API."""
    return {
        "message": "Community Admin API",
        "meta_tables": f"{settings.API_V1_PREFIX}/meta-tables",
        "access_profile": f"{settings.API_V1_PREFIX}/auth/me",
        "health": f"{settings.API_V1_PREFIX}/health/",
    }
