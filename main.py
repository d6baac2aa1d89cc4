import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from config import APP_NAME, APP_VERSION, ENVIRONMENT, LOG_LEVEL
from core.errors import install_error_handlers
from core.logging import configure_logging, request_id_var
from routers.account import api as account_api
from routers.bookmark import api as bookmark_api
from routers.comment import api as comment_api
from routers.dont_recommend import api as dont_recommend_api
from routers.notification import api as notification_api
from routers.playlist import api as playlist_api
from routers.profile import api as profile_api
from routers.publish import api as publish_api
from routers.report import api as report_api
from routers.stream import api as stream_api
from routers.watch_later import api as watch_later_api
from routers.webhooks import api as webhooks_api

configure_logging(environment=ENVIRONMENT, log_level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=APP_NAME,
    description="Accounts, profiles, videos, blogs and the social graph around them",
    version=APP_VERSION,
    swagger_ui_parameters={
        "docExpansion": "none",
        "displayRequestDuration": True,
        "filter": True,
    },
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        request_id_var.set(request_id)
        request.state.request_id = request_id

        start_time = time.time()
        query_str = f"?{request.url.query}" if request.query_params else ""
        logger.info(
            f"REQUEST | id={request_id} | method={request.method} | path={request.url.path}{query_str} | "
            f"ip={request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"ERROR | id={request_id} | method={request.method} | path={request.url.path} | "
                f"error={type(e).__name__}: {str(e)} | time={process_time:.3f}s",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"RESPONSE | id={request_id} | method={request.method} | path={request.url.path} | "
            f"status={response.status_code} | time={process_time:.3f}s"
        )
        response.headers["X-Request-ID"] = request_id
        return response


# Request logging runs before CORS so every request is logged
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "Authorization", "Content-Type", "Accept", "Origin", "auth-wallet-signature"],
)

install_error_handlers(app)

app.include_router(account_api.router)         # Accounts and session cache
app.include_router(profile_api.router)         # Profiles and follows
app.include_router(publish_api.router)         # Videos, blogs, likes, tips
app.include_router(comment_api.router)         # Comments and replies
app.include_router(playlist_api.router)        # Playlists
app.include_router(watch_later_api.router)     # Watch later
app.include_router(bookmark_api.router)        # Bookmarks
app.include_router(notification_api.router)    # Notifications
app.include_router(dont_recommend_api.router)  # Hidden creators
app.include_router(report_api.router)          # Publish reports
app.include_router(stream_api.router)          # Live streams
app.include_router(webhooks_api.router)        # Alchemy, Cloudflare and pub/sub callbacks


@app.on_event("startup")
async def startup_event():
    logger.info("%s started | environment=%s", APP_NAME, ENVIRONMENT)

    from fastapi.routing import APIRoute

    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ",".join(sorted(route.methods))
            logger.debug(f"{methods:8} {route.path}")


@app.get("/")
async def read_root():
    """
    Root endpoint to check if the server is running.
    Returns basic API information.
    """
    return {
        "status": "online",
        "message": f"Welcome to {APP_NAME}!",
        "version": APP_VERSION,
        "environment": ENVIRONMENT,
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
