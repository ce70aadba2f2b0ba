# imgur_upload.py
import os
from typing import Optional

import requests

CLIENT_ID = os.getenv("IMGUR_CLIENT_ID", "").strip()
UPLOAD_URL = "https://api.imgur.com/3/image"


class ImgurUploadError(RuntimeError):
    pass


def upload_image_from_url(url: str, client_id: str = None, timeout: int = 30) -> Optional[str]:
    """Re-host a remote image on imgur and return its direct link."""
    client_id = CLIENT_ID if client_id is None else client_id
    if not url or not client_id:
        return None
    try:
        r = requests.post(
            UPLOAD_URL,
            headers={"Authorization": f"Client-ID {client_id}"},
            data={"image": url, "type": "url"},
            timeout=timeout,
        )
        r.raise_for_status()
        body = r.json()
    except (requests.RequestException, ValueError) as e:
        raise ImgurUploadError(f"imgur upload failed: {e} (source={url})") from e
    return (body.get("data") or {}).get("link") or None
