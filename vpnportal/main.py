import logging
import sys
import time
from typing import Optional

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from common import config
from common.logging_config import setup_logging
from common.database import get_db, engine, SessionLocal

from vpnportal.models import portal as portal_models
from vpnportal.api.router import api_router
from vpnportal.core.errors import PortalError
from vpnportal.core.sessions import SESSION_COOKIE_NAME, CookieSigner, InMemorySessionStore, SessionStore
from vpnportal.core.uploads import ImageStorage, UPLOAD_URL_PREFIX
from vpnportal.seed import ensure_initial_admin

setup_logging()
logger = logging.getLogger(__name__)


def init_db(max_retries: int = 10):
    """برای اتصال به دیتابیس با منطق تلاش مجدد و لاگ دقیق خطا تلاش می‌کند."""
    for i in range(max_retries):
        try:
            with engine.connect() as connection:
                connection.execute(text('SELECT 1'))

            portal_models.Base.metadata.create_all(bind=engine)
            logger.info("✅ اتصال به پایگاه داده با موفقیت برقرار و جداول ایجاد شدند!")
            return
        except Exception as e:
            sleep_time = 2 ** i
            logger.warning(
                f"اتصال به پایگاه داده ناموفق بود. خطا: [{e}]. تلاش مجدد تا {sleep_time} ثانیه دیگر... (تلاش {i + 1}/{max_retries})"
            )
            time.sleep(sleep_time)

    logger.critical("❌ پس از چندین تلاش، اتصال به پایگاه داده برقرار نشد. برنامه خاتمه می‌یابد.")
    sys.exit(1)


def _field_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        # اولین جزء loc محل پارامتر است (body, query, path)
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "body")
        errors.append({"field": field, "message": err.get("msg", "Invalid value")})
    return errors


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.payload})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _field_errors(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_session_middleware(app: FastAPI, signer: CookieSigner):
    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        store: SessionStore = request.app.state.session_store
        session_id = signer.unsign(request.cookies.get(SESSION_COOKIE_NAME))
        admin_id = store.get(session_id) if session_id else None

        request.state.session_id = session_id if admin_id is not None else None
        request.state.admin_id = admin_id
        request.state.session_ended = False

        response = await call_next(request)

        if getattr(request.state, "session_id", None):
            # هر درخواست با نشست زنده کوکی را تمدید می‌کند (انقضای لغزان)
            response.set_cookie(
                SESSION_COOKIE_NAME,
                signer.sign(request.state.session_id),
                max_age=config.SESSION_MAX_AGE,
                httponly=True,
                samesite="lax",
                secure=config.is_production(),
                path="/",
            )
        elif request.state.session_ended or session_id:
            response.delete_cookie(
                SESSION_COOKIE_NAME, path="/", httponly=True, samesite="lax", secure=config.is_production()
            )
        return response


def create_app(
    session_store: Optional[SessionStore] = None,
    image_storage: Optional[ImageStorage] = None,
    session_secret: str = config.SESSION_SECRET,
) -> FastAPI:
    app = FastAPI(title="VPN Support Portal API")

    if session_secret == config.DEV_SESSION_SECRET:
        logger.warning("SESSION_SECRET not set, using fallback - this is insecure in production!")

    if session_store is None:
        session_store = InMemorySessionStore(ttl_seconds=config.SESSION_MAX_AGE)
    if image_storage is None:
        image_storage = ImageStorage(config.UPLOAD_DIR, config.MAX_FILE_SIZE)
    app.state.session_store = session_store
    app.state.image_storage = image_storage

    register_exception_handlers(app)
    register_session_middleware(app, CookieSigner(session_secret))

    @app.on_event("startup")
    def startup_event():
        logger.info("VPN Support Portal API در حال راه‌اندازی است...")
        init_db()
        app.state.image_storage.ensure_directory()
        db = SessionLocal()
        try:
            ensure_initial_admin(db, config.INITIAL_ADMIN_USERNAME, config.INITIAL_ADMIN_PASSWORD)
        finally:
            db.close()

    app.include_router(api_router)
    app.mount(
        UPLOAD_URL_PREFIX,
        StaticFiles(directory=app.state.image_storage.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/healthz", tags=["Monitoring"])
    def health_check(db: Session = Depends(get_db)):
        db_status = "OK"
        try:
            db.execute(text('SELECT 1'))
        except Exception:
            db_status = "Error"
        return {"status": "OK", "database": db_status}

    return app


app = create_app()
