# slack_poster.py
import os
from typing import Optional

import requests

from coin_models import MessagePayload

POST_MESSAGE_URL = "https://slack.com/api/chat.postMessage"
BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN", "").strip()
DEFAULT_CHANNEL = os.getenv("SLACK_CHANNEL", "").strip() or "dev"


def post_slack_message(text: str, channel: str = None, blocks: list = None,
                       unfurl_links: bool = False, token: str = None, timeout: int = 10) -> bool:
    """Post a message with chat.postMessage. Fire-and-forget: the response is not read."""
    token = BOT_TOKEN if token is None else token
    if not token:
        return False
    body = {
        "channel": channel or DEFAULT_CHANNEL,
        "text": text,
        "blocks": list(blocks) if blocks else [],
        "unfurl_links": bool(unfurl_links),
    }
    requests.post(
        POST_MESSAGE_URL,
        json=body,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        },
        timeout=timeout,
    )
    return True


def post_payload(payload: MessagePayload, channel: Optional[str] = None, token: str = None) -> bool:
    return post_slack_message(
        payload.text,
        channel=channel,
        blocks=list(payload.blocks),
        unfurl_links=payload.unfurl_links,
        token=token,
    )
