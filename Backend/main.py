from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers.auth import router as auth_router
from routers.profile import router as profile_router
from routers.categories import router as categories_router
from routers.organizations import router as organizations_router
from routers.gaps import router as gaps_router
from routers.dashboard import router as dashboard_router

from database import engine, Base, SessionLocal
from crud import seed_default_categories
import config
import logging

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="NYC Gap Finder API",
    description="Community organizations, service coverage and gap reports across NYC boroughs",
    version="1.0.0"
)

# -------------------------------------
# Startup - Create Database Tables
# -------------------------------------
@app.on_event("startup")
async def startup_event():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}")
        logger.warning("Application will continue, but DB operations may fail")
        return

    db = SessionLocal()
    try:
        seed_default_categories(db)
    except Exception as e:
        logger.error(f"Failed to seed service categories: {e}")
    finally:
        db.close()


# -------------------------------------
# CORS SETTINGS
# -------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------
# ROUTERS
# -------------------------------------
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(categories_router)
app.include_router(organizations_router)
app.include_router(gaps_router)
app.include_router(dashboard_router)


# -------------------------------------
# Root Endpoint
# -------------------------------------
@app.get("/")
async def root():
    return {
        "message": "NYC Gap Finder API",
        "endpoints": {
            "auth": "/api/auth",
            "profile": "/api/profile",
            "service categories": "/api/service-categories",
            "organizations": "/api/organizations",
            "gap reports": "/api/gaps",
            "coverage": "/api/gaps/coverage",
            "dashboard": "/api/dashboard/stats",
            "borough heatmap": "/api/dashboard/heatmap",
        }
    }

#--------------Health Check Endpoint----------------
@app.get("/health")
async def health_check():
    return {"status": "ok"}
