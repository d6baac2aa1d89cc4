import base64
import binascii
import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session

from config import Settings, get_settings
from routers.dependencies import get_db, get_message_bus
from utils.crypto import decrypt_string
from utils.signatures import (
    cloudflare_signature_expired,
    is_valid_alchemy_signature,
    is_valid_cloudflare_signature,
    parse_cloudflare_signature,
)

from . import service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/address-updated")
async def on_address_updated(
    request: Request,
    x_alchemy_signature: str = Header(None),
    settings: Settings = Depends(get_settings),
):
    """Alchemy address activity. Only the signature is checked for now."""
    raw_body = await request.body()
    if not x_alchemy_signature or not raw_body:
        raise HTTPException(status_code=400, detail="Invalid request")
    if not is_valid_alchemy_signature(
        raw_body, x_alchemy_signature, signing_key=settings.alchemy_webhook_signing_key
    ):
        logger.warning("Alchemy webhook signature mismatch")
        raise HTTPException(status_code=403, detail="Request corrupted in transit.")
    logger.info("Address activity received")
    return Response(status_code=200)


@router.post("/cloudflare/finished")
async def on_transcoding_finished(
    request: Request,
    webhook_signature: str = Header(None),
    db: Session = Depends(get_db),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    """
    ## Cloudflare Stream Webhook

    Called when a video finished transcoding (or failed to).

    ### Required Headers:
    - `webhook-signature`: `time=<unix>,sig1=<hex>`, an HMAC-SHA256 of
      `"<time>.<raw body>"` no older than one hour
    """
    raw_body = await request.body()
    try:
        timestamp, signature = parse_cloudflare_signature(webhook_signature or "")
    except KeyError:
        raise HTTPException(status_code=403, detail="Forbidden")
    if cloudflare_signature_expired(timestamp) or not is_valid_cloudflare_signature(
        raw_body, timestamp, signature, signing_key=settings.cloudflare_webhook_signing_key
    ):
        logger.warning("Cloudflare webhook signature rejected")
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Bad Request")
    service.on_transcoding_finished(
        db, bus=bus, processing_topic=settings.publish_processing_topic, body=body
    )
    return Response(status_code=200)


@router.post("/pubsub/video-deleted")
async def on_video_deleted(
    request: Request,
    db: Session = Depends(get_db),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    """Push delivery of a deleted video; ``message.data`` is the encrypted publish id."""
    try:
        envelope = await request.json()
    except json.JSONDecodeError:
        envelope = None
    if not envelope:
        logger.error("error: no Pub/Sub message received")
        raise HTTPException(status_code=400, detail="Bad Request: no Pub/Sub message received")
    message = envelope.get("message") if isinstance(envelope, dict) else None
    if not message:
        logger.error("error: invalid Pub/Sub message format")
        raise HTTPException(status_code=400, detail="Bad Request: invalid Pub/Sub message format")

    try:
        data = base64.b64decode(message.get("data") or "").decode().strip()
    except (binascii.Error, UnicodeDecodeError):
        data = ""
    if not data:
        logger.error("error: No data found")
        raise HTTPException(status_code=400, detail="Bad Request: No data found")

    try:
        publish_id = decrypt_string(data, settings.encrypt_key)
    except (binascii.Error, ValueError):
        publish_id = ""
    if not publish_id:
        logger.error("error: Invalid data")
        raise HTTPException(status_code=400, detail="Bad Request: Invalid data")

    service.delete_video_publish(
        db, bus=bus, deletion_topic=settings.publish_deletion_topic, publish_id=publish_id
    )
    return Response(status_code=204)
