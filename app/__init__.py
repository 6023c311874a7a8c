# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the bus booking API gateway:
# - main.py: create_app(), middleware chain, route group mounting
# - server.py: uvicorn runner bound to HOST/PORT
# - config.py: Environment variable loading and settings
# - middleware/: CORS and body decoding stages
# - routers/: liveness endpoints and the three route group slots
#
# The gateway is thin wiring; endpoint logic lives in the route groups.
# =============================================================================

__version__ = "1.0.0"
