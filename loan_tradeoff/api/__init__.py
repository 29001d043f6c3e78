"""
Tradeoff API Application Factory
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging
from .scenarios import router as scenarios_router
from .loans import router as loans_router
from .savings_plans import router as savings_plans_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = get_config()
    setup_logging(level=settings.log_level, log_format=settings.log_format, log_file=settings.log_file)

    app = FastAPI(
        title="Loan Tradeoff API",
        description="Compare financing a purchase against keeping the cash invested",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(scenarios_router, prefix="/scenarios", tags=["Scenarios"])
    app.include_router(loans_router, prefix="/loans", tags=["Loans"])
    app.include_router(savings_plans_router, prefix="/savings-plans", tags=["Savings Plans"])

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "loan_tradeoff_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Loan Tradeoff API",
            "version": __version__,
            "default_mode": settings.default_mode,
            "default_period_days": settings.default_period_days,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "scenarios": "/scenarios/simulate",
                "loans": "/loans/quote",
                "savings-plans": "/savings-plans",
            }
        }

    return app


def run_server(host: str = "127.0.0.1", port: int = 8090, reload: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "loan_tradeoff.api:app",
        host=host,
        port=port,
        reload=reload,
        log_level=get_config().log_level.lower()
    )


app = create_app()
