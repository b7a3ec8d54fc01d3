from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# HTTP client debug logs off
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import grade_reports, students, validation_reports

from database.db import Base, engine
import models.enrollments  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (frontend origins come from settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency (adds X-Latency-Ms response header)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (one JSON error format)
add_error_handlers(app)

# ✅ /v1 prefixed routers
app.include_router(students.router,           prefix="/v1")
app.include_router(grade_reports.router,      prefix="/v1")   # ✅ grade certificates
app.include_router(validation_reports.router, prefix="/v1")   # ✅ course validation / progression


# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _create_tables():
    if not settings.DB_AUTO_CREATE:
        return
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", engine.url.get_backend_name())


# ✅ root
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - grade reports and academic progression"}
