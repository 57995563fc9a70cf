from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from quotation_tool import __version__
from quotation_tool.engine import CustomerDetails, QuotationStore
from quotation_tool.engine.pricing_engine import TAX_RATE
from quotation_tool.config.settings import get_settings
from quotation_tool.api.quotation_api import router as quotation_router


def create_app() -> FastAPI:
    """Build an app that owns its own quotation."""
    app = FastAPI(
        title="Quotation Tool API",
        description="Backend API for building and exporting price quotations",
        version=__version__,
    )

    # Enable CORS for frontend development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = QuotationStore()
    app.state.customer = CustomerDetails()

    app.include_router(quotation_router)

    @app.get("/")
    async def root():
        return {"status": "online", "message": "Quotation Tool API Active"}

    @app.get("/system/status")
    async def get_status():
        settings = get_settings()
        return {
            "items": len(app.state.store),
            "tax_rate": TAX_RATE,
            "default_price_per_sqft": settings.default_price_per_sqft,
            "company": settings.company_name,
        }

    return app


app = create_app()
