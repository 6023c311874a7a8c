# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Bus Booking API:
# - test_main.py: liveness, CORS, prefix isolation, fallback
# - test_body_middleware.py: JSON and form body decoding
# - test_middleware_chain.py: stage ordering
# - test_route_groups.py: loading, validating and mounting route groups
# - test_config.py / test_server.py: settings and the uvicorn runner
# - test_querystring.py: nested form parser
#
# Run tests with: pytest
# =============================================================================
