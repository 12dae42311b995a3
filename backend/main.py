"""
Expo Floor Planner – FastAPI Backend

Main entry point. Sets up logging and CORS, includes all routes, initializes DB.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from config import CORS_ORIGINS, EXPORT_DIR, LOG_LEVEL
from database import init_db

# Import route modules
from routes.geometry import router as geometry_router
from routes.editor import router as editor_router
from routes.projects import router as projects_router
from routes.export import router as export_router
from routes.analysis import router as analysis_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    await init_db()
    logger.info("Database ready")
    yield


app = FastAPI(
    title="Expo Floor Planner",
    description="Booth layout geometry, editing and export for exhibition floor plans",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Static file serving for exports
app.mount("/exports", StaticFiles(directory=str(EXPORT_DIR)), name="exports")

# Include routers
app.include_router(geometry_router)
app.include_router(editor_router)
app.include_router(projects_router)
app.include_router(export_router)
app.include_router(analysis_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": "1.0.0"}


if __name__ == "__main__":
    import uvicorn
    from config import HOST, PORT
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
