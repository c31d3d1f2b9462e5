import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from swaptax.api.tax import router as tax_router
from swaptax.container import Container
from swaptax.exceptions import InvalidSwapRecordError

logger = logging.getLogger("swaptax.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    yield
    await container.http_client().close()
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title="SwapTax", version="0.1.0", lifespan=lifespan)


@app.exception_handler(InvalidSwapRecordError)
async def invalid_record_handler(request: Request, exc: InvalidSwapRecordError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "signature": exc.signature})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tax_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
