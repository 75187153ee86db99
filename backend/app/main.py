from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.exceptions import register_exception_handlers
from app.startup import configure_logging, run_startup_checks

# ========== Restaurants ==========
from modules.restaurants.routes.restaurant_routes import router as restaurant_router

# ========== Customers ==========
from modules.customers.routers.customer_router import router as customer_router

# ========== Loyalty & Rewards ==========
from modules.loyalty.routes.reward_engine_routes import router as reward_engine_router
from modules.loyalty.routes.wallet_routes import router as wallet_router

# ========== Menu ==========
from modules.menu.routes.menu_item_routes import router as menu_item_router

# ========== Analytics ==========
from modules.analytics.routers.loyalty_analytics_router import router as loyalty_analytics_router

configure_logging()
settings = get_settings()

app = FastAPI(
    title="Restaurant Loyalty API",
    description="""
    Loyalty program backend for restaurants.

    ## Features

    * **Reward Engine** - Smart (profit share) or manual points earning with tier multipliers
    * **Customers** - Onboarding, tiers and points history
    * **Wallet** - Purchases, reward catalog and redemptions
    * **Menu Items** - Per-item loyalty rules and points previews
    * **Loyalty Analytics** - ROI, revenue breakdown and customer behavior
    """,
    version="1.0.0",
    debug=settings.debug,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(restaurant_router)
app.include_router(customer_router)
app.include_router(reward_engine_router)
app.include_router(wallet_router)
app.include_router(menu_item_router)
app.include_router(loyalty_analytics_router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration and database on application startup"""
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": "Restaurant loyalty backend is running"}


@app.get("/health")
def health_check():
    return {"status": "healthy", "environment": settings.environment}
