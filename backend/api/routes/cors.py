"""
Preflight responses for browser-called endpoints.

The activation and claim endpoints are called from the web client on
another origin, so their OPTIONS requests are answered explicitly.
"""

from fastapi import Response, status

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def preflight_response() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=PREFLIGHT_HEADERS)
