# ================================
# FILE: upload_store/middleware/cors.py
# ================================

from typing import Any, Dict, List

ALLOW_METHODS = ["POST", "GET", "OPTIONS", "PUT", "PATCH", "DELETE"]
ALLOW_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "Content-Range",
    "Content-Disposition",
    "Authorization",
]

def cors_middleware_options(origins: List[str]) -> Dict[str, Any]:
    """
    Keyword arguments for Starlette's CORSMiddleware.

    Credentialed requests cannot be answered with a wildcard origin, so "*"
    becomes a match-all regex and the request Origin is echoed back.
    """
    origins = [o.strip() for o in origins if o.strip()]
    options: Dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ALLOW_METHODS,
        "allow_headers": ALLOW_HEADERS,
    }
    if not origins or "*" in origins:
        options["allow_origins"] = []
        options["allow_origin_regex"] = ".*"
    else:
        options["allow_origins"] = origins
    return options
