# assetflow/routers/__init__.py

from .auth.auth_router import router as auth_router

from .assets.asset_router import router as asset_router

from .masters.department_router import router as department_router
from .masters.vendor_router import router as vendor_router

from .reports.report_router import router as report_router


__all__ = [
"auth_router",

"asset_router",

"department_router",
"vendor_router",

"report_router",
]
