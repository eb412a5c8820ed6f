"""HTTP-сервис интерпретации испытаний и расчёта фундаментов (FastAPI).

Запуск:
    uvicorn app:app --port 8000
"""

import logging

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from geotech import calculator
from geotech.config import configure_logging, load_settings
from geotech.storage import build_store

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title="Geotechnical compute service")
app.state.settings = settings
app.state.store = build_store(settings)


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": app.state.settings.cors_allow_origin,
        "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
        "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    }


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


@app.middleware("http")
async def cors(request: Request, call_next):
    # Preflight обрабатывается до маршрутизации
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())
    response = await call_next(request)
    response.headers.update(cors_headers())
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return error_response(exc.status_code, message)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/compute/{kind}")
async def compute(kind: str, request: Request):
    test_type = calculator.KINDS.get(kind)
    if test_type is None:
        raise HTTPException(status_code=404, detail=f"Unknown calculation: {kind}")

    try:
        body = await request.json()
    except ValueError:
        return error_response(400, "Request body must be valid JSON")

    status, payload = await run_in_threadpool(calculator.run, test_type, body, request.app.state.store)
    return JSONResponse(payload, status_code=status)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
