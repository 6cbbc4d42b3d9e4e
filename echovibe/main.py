"""
EchoVibe API - Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from echovibe.utils.config import settings
from echovibe.utils.logger import get_logger

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="EchoVibe API",
    description="Mood-driven travel itineraries and quotes",
    version="1.0.0"
)

# CORS middleware - allow the web client to call our API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "service": "EchoVibe API",
        "status": "running",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Detailed health check"""
    from echovibe.agents.llm_config import llm_provider
    from echovibe.tools.mailer import smtp_configured

    return {
        "status": "healthy",
        "api": "ok",
        "llm_providers": llm_provider.provider_order(),
        "smtp": "configured" if smtp_configured(settings) else "mock",
    }


# Import and include routers
from echovibe.routes.plans import router as plans_router
from echovibe.routes.quotes import router as quotes_router
app.include_router(plans_router)
app.include_router(quotes_router)

logger.info("app_started", environment=settings.environment)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("echovibe.main:app", host=settings.host, port=settings.port)
