# =============================================================================
# app/routers/bookings.py - Booking Route Group
# =============================================================================
# Mounted at /api/bookings. Endpoints registered on `router` are served below
# that prefix with CORS applied and request.state.body already decoded.
#
# A deployment can point BOOKING_ROUTES at its own handler instead.
# =============================================================================

from fastapi import APIRouter

router = APIRouter()
