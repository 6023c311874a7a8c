# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# - health.py: root liveness endpoint and /health
# - auth.py: route group mounted at /api/auth
# - buses.py: route group mounted at /api/buses
# - bookings.py: route group mounted at /api/bookings
#
# The route groups are loaded by import path (see app/route_groups.py) so a
# deployment can swap any of them without touching main.py.
# =============================================================================

from . import health

__all__ = [
    "health",
]
