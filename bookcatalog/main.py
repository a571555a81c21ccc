from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import settings
from .core.audit import AuditMiddleware, configure_logging
from .core.errors import register_exception_handlers
from .database import init_db
from .routers import auth as auth_router
from .routers import authors as authors_router
from .routers import books as books_router
from .routers import genres as genres_router
from .routers import publishers as publishers_router


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title="Book Catalog – Backend", version="0.1.0")

    app.add_middleware(AuditMiddleware, prefix=settings.api_prefix)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        init_db()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router.router, prefix=settings.api_prefix)
    app.include_router(books_router.router, prefix=settings.api_prefix)
    app.include_router(authors_router.router, prefix=settings.api_prefix)
    app.include_router(publishers_router.router, prefix=settings.api_prefix)
    app.include_router(genres_router.router, prefix=settings.api_prefix)

    upload_root = Path(settings.upload_dir)
    upload_root.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(upload_root)), name="uploads")

    return app


app = create_app()
