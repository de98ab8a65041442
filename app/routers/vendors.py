# =============================================================================
# app/routers/vendors.py - Vendor Endpoints
# =============================================================================

from app.routers.scoped import scoped_crud_router
from core.services.vendor_service import VendorService

router = scoped_crud_router(VendorService)
