import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Database settings
DATABASE_URL = os.getenv("DATABASE_URL")

# Redis (message bus + session cache)
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Message that wallet users sign to prove ownership of an address
MESSAGE = os.getenv("MESSAGE", "")

# External services
PRIVATE_SERVICE_URL = os.getenv("PRIVATE_SERVICE_URL", "http://localhost:4000")
UPLOAD_SERVICE_URL = os.getenv("UPLOAD_SERVICE_URL", "http://localhost:4444")
CLOUDFLARE_BASE_URL = os.getenv("CLOUDFLARE_BASE_URL", "https://api.cloudflare.com")
CLOUDFLARE_ACCOUNT_ID = os.getenv("CLOUDFLARE_ACCOUNT_ID", "")
CLOUDFLARE_API_TOKEN = os.getenv("CLOUDFLARE_API_TOKEN", "")
CLOUDFLARE_LIVE_STREAM_PLAYBACK_BASEURL = os.getenv(
    "CLOUDFLARE_LIVE_STREAM_PLAYBACK_BASEURL", ""
)
DEFAULT_LIVE_STREAM_THUMBNAIL = os.getenv("DEFAULT_LIVE_STREAM_THUMBNAIL", "")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# Pub/sub topics
PUBLISH_PROCESSING_TOPIC = os.getenv("PUBLISH_PROCESSING_TOPIC", "publish-processing")
NEW_NOTIFICATION_TOPIC = os.getenv("NEW_NOTIFICATION_TOPIC", "new-notification")
PUBLISH_DELETION_TOPIC = os.getenv("PUBLISH_DELETION_TOPIC", "publish-deletion")
VIDEO_DELETION_SUBSCRIPTION = os.getenv(
    "VIDEO_DELETION_SUBSCRIPTION", "video-deletion"
)

# Webhooks
ALCHEMY_WEBHOOK_SIGNING_KEY = os.getenv("ALCHEMY_WEBHOOK_SIGNING_KEY", "")
CLOUDFLARE_WEBHOOK_SIGNING_KEY = os.getenv("CLOUDFLARE_WEBHOOK_SIGNING_KEY", "")
ENCRYPT_KEY = os.getenv("ENCRYPT_KEY", "")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Application settings
APP_NAME = "Content Platform API"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    """Configuration handed to services and clients at construction time."""

    environment: str = "development"
    redis_url: str = "redis://localhost:6379/0"
    message: str = ""
    private_service_url: str = "http://localhost:4000"
    upload_service_url: str = "http://localhost:4444"
    cloudflare_base_url: str = "https://api.cloudflare.com"
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    live_stream_playback_base_url: str = ""
    default_live_stream_thumbnail: str = ""
    http_timeout_seconds: float = 10.0
    publish_processing_topic: str = "publish-processing"
    new_notification_topic: str = "new-notification"
    publish_deletion_topic: str = "publish-deletion"
    video_deletion_subscription: str = "video-deletion"
    alchemy_webhook_signing_key: str = ""
    cloudflare_webhook_signing_key: str = ""
    encrypt_key: str = ""


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        environment=ENVIRONMENT,
        redis_url=REDIS_URL,
        message=MESSAGE,
        private_service_url=PRIVATE_SERVICE_URL,
        upload_service_url=UPLOAD_SERVICE_URL,
        cloudflare_base_url=CLOUDFLARE_BASE_URL,
        cloudflare_account_id=CLOUDFLARE_ACCOUNT_ID,
        cloudflare_api_token=CLOUDFLARE_API_TOKEN,
        live_stream_playback_base_url=CLOUDFLARE_LIVE_STREAM_PLAYBACK_BASEURL,
        default_live_stream_thumbnail=DEFAULT_LIVE_STREAM_THUMBNAIL,
        http_timeout_seconds=HTTP_TIMEOUT_SECONDS,
        publish_processing_topic=PUBLISH_PROCESSING_TOPIC,
        new_notification_topic=NEW_NOTIFICATION_TOPIC,
        publish_deletion_topic=PUBLISH_DELETION_TOPIC,
        video_deletion_subscription=VIDEO_DELETION_SUBSCRIPTION,
        alchemy_webhook_signing_key=ALCHEMY_WEBHOOK_SIGNING_KEY,
        cloudflare_webhook_signing_key=CLOUDFLARE_WEBHOOK_SIGNING_KEY,
        encrypt_key=ENCRYPT_KEY,
    )
