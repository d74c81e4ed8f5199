# quickcourt/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from quickcourt.database import engine, Base
from quickcourt.config import settings
from quickcourt.core.exceptions import QuickCourtError
from quickcourt.routers import (
    auth,
    users,
    facilities,
    courts,
    bookings,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("🚀 [STARTUP] QuickCourt API ready")
    yield


app = FastAPI(
    title="QuickCourt API",
    description="Sports venue booking API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    expose_headers=["*"],
    max_age=600,
)


@app.exception_handler(QuickCourtError)
async def quickcourt_error_handler(request: Request, exc: QuickCourtError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"💥 [DATABASE] {request.method} {request.url.path} failed")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(facilities.router, prefix="/facilities", tags=["Facilities"])
app.include_router(courts.router, prefix="/courts", tags=["Courts"])
app.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

@app.get("/")
def read_root():
    return {
        "message": "QuickCourt API running",
        "version": "1.0.0"
    }

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": "QuickCourt API",
    }
