from fastapi.responses import JSONResponse


class StoreError(Exception):
    code = "STORE_ERROR"


class StoreConnectionError(StoreError):
    code = "STORE_CONNECTION_ERROR"


class StoreQueryError(StoreError):
    code = "STORE_QUERY_ERROR"


class NotFoundError(Exception):
    code = "NOT_FOUND"


VALIDATION_ERROR = "VALIDATION_ERROR"


def error_response(status_code: int, mensaje: str, code: str, **extra) -> JSONResponse:
    """Client-facing error body; driver details stay in the logs."""
    return JSONResponse(
        status_code=status_code,
        content={"mensaje": mensaje, "error": {"codigo": code, **extra}},
    )
