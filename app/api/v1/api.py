from fastapi import APIRouter

from app.api.v1.routers import checkout as checkout_router
from app.api.v1.routers import status as status_router
from app.api.v1.routers import admin_open_hours as admin_open_hours_router

router = APIRouter()

# storefront routes
router.include_router(checkout_router.router)
router.include_router(status_router.router)

# admin routes
router.include_router(admin_open_hours_router.router)
