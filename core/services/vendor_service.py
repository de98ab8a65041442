# =============================================================================
# core/services/vendor_service.py - Vendor Repository
# =============================================================================

from core.models.common import OrderBy
from core.models.vendor import Vendor, VendorCreate, VendorUpdate
from core.services.scoped_repository import ScopedRepository


class VendorService(ScopedRepository[Vendor]):
    table = "vendors"
    resource_name = "Vendor"
    record_model = Vendor
    create_model = VendorCreate
    update_model = VendorUpdate
    attribution_field = "saved_by"
    default_order = (OrderBy("created_at", descending=True),)
    sortable_columns = frozenset({
        "name", "category", "status", "created_at", "updated_at",
    })
