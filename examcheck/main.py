import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from examcheck.config import settings
from examcheck.routes.eligibility import router as eligibility_router
from examcheck.routes.exams import router as exams_router
from examcheck.services.corpus_service import corpus_service

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    count = corpus_service.load()
    logger.info(f"Exam corpus ready with {count} exams")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Eligibility checking for competitive exams across divisions and sessions",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(exams_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "examcheck",
        "exams_loaded": len(corpus_service.exams),
        "load_errors": len(corpus_service.load_errors)
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("examcheck.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
