import logging
import traceback

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from zacgt.api.crypto_tax import router as crypto_tax_router
from zacgt.config import settings
from zacgt.container import Container
from zacgt.domain.errors import LedgerError

logger = logging.getLogger("zacgt.api")
logging.getLogger("zacgt").setLevel(settings.log_level.upper())

# Wires zacgt.api.deps on construction
container = Container()

app = FastAPI(title=settings.app_name, version=settings.version, debug=settings.debug)
app.state.container = container


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    logger.warning("Rejected ledger on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Failed to process transactions", "error": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"success": False, "detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(crypto_tax_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": settings.version}
