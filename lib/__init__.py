# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - querystring.py: Extended URL-encoded form parser (nested keys, arrays)
#
# These modules have no dependency on the web layer and can be tested in
# isolation.
# =============================================================================

from lib.querystring import count_parameters, parse_form, split_key

__all__ = [
    "count_parameters",
    "parse_form",
    "split_key",
]
