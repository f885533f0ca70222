from fastapi.responses import JSONResponse, Response

from careflow.core.errors import PortalError

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}


def preflight_response() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


def json_response(content: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def error_response(error: PortalError, status_code: int | None = None) -> JSONResponse:
    return json_response(error.to_body(), status_code=status_code or error.status_code)
