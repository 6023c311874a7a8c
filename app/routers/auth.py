# =============================================================================
# app/routers/auth.py - Auth Route Group
# =============================================================================
# Mounted at /api/auth. Endpoints registered on `router` are served below
# that prefix with CORS applied and request.state.body already decoded.
#
# A deployment can point AUTH_ROUTES at its own handler instead.
# =============================================================================

from fastapi import APIRouter

router = APIRouter()
