from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
from contextlib import asynccontextmanager


# Import routes
from routes import review_routes, project_routes
from database.models import init_database, close_database
from middleware.errors import register_exception_handlers
from config.logging_config import setup_logging
from config.variable import CORS_ORIGINS, APP_DEBUG

setup_logging()
logger = logging.getLogger("craftcode")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    await init_database()
    logger.info(f"CraftCode API started in {'DEBUG' if APP_DEBUG else 'PRODUCTION'} mode")
    yield
    # Shutdown
    close_database()
    logger.info("Shutting down CraftCode API")

app = FastAPI(title="CraftCode Dashboard API", version="0.1.0", lifespan=lifespan)

# CORS middleware for the dashboard frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(review_routes.router)
app.include_router(project_routes.router)

@app.get("/")
async def root():
    return {"ok": True, "message": "CraftCode API is running"}

@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=APP_DEBUG)
