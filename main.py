# main.py
from typing import Optional
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color, StoreBackend
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from core.scoped_blob_store import ScopedBlobStore
from fastapi.responses import JSONResponse
from repository.node_repository import InMemoryNodeRepository, RedisNodeRepository
from util.constants import REQUESTER_HEADER
from util.errors import StoreError
from util.logger import init_logger


async def _requester_or_ip(request: Request) -> str:
    requester = request.headers.get(REQUESTER_HEADER)
    if requester:
        return requester
    return request.client.host if request.client else "unknown"


def build_store() -> ScopedBlobStore:
    if settings.STORE_BACKEND == StoreBackend.REDIS:
        repository = RedisNodeRepository()
    else:
        repository = InMemoryNodeRepository()
    return ScopedBlobStore(repository, strict=settings.STRICT_IMMUTABILITY)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    logger = init_logger()
    print(f"{Color.GREEN}Initializing...{Color.RESET}")
    if settings.STORE_BACKEND == StoreBackend.REDIS:
        try:
            # Warm Redis
            redis = await get_redis()
            await FastAPILimiter.init(redis, identifier=_requester_or_ip)
        except Exception as e:
            print("Failed to connect to Redis:", e)
            raise
    logger.info(
        "store.ready backend=%s strict=%s",
        settings.STORE_BACKEND.value,
        fastApi.state.store.strict,
    )
    print(f"{Color.BLUE}Server Started{Color.RESET}")

    try:
        yield
    finally:
        if settings.STORE_BACKEND == StoreBackend.REDIS:
            try:
                await close_redis()
            except Exception as e:
                print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


def create_app(store: Optional[ScopedBlobStore] = None) -> FastAPI:
    app = FastAPI(lifespan=lifespan)
    app.state.store = store if store is not None else build_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOWED_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "PUT", "POST", "DELETE"],
        allow_headers=["Content-Type", "Accept", REQUESTER_HEADER],
    )

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.error.value.message},
        )

    @app.exception_handler(429)
    async def ratelimit_handler(request: Request, exc):
        return JSONResponse(
            status_code=429,
            content={"detail": "Too many requests"},
            headers={"Retry-After": str(settings.RATE_LIMIT_SECONDS)},
        )

    routes.register_routes(app)
    return app


app: FastAPI = create_app()

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
