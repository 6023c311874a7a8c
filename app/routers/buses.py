# =============================================================================
# app/routers/buses.py - Bus Route Group
# =============================================================================
# Mounted at /api/buses. Endpoints registered on `router` are served below
# that prefix with CORS applied and request.state.body already decoded.
#
# A deployment can point BUS_ROUTES at its own handler instead.
# =============================================================================

from fastapi import APIRouter

router = APIRouter()
