import io
import re

from PIL import Image

CSRF_RE = re.compile(r'name="csrf_token"[^>]*value="([^"]+)"')
GAME_ID_RE = re.compile(r'data-review-game="([^"]+)"')


def get_csrf_token(response):
    match = CSRF_RE.search(response.text)
    if not match:
        raise ValueError("CSRF token not found")
    return match.group(1)


def game_ids(response):
    """Ids of the games listed on the submission page."""
    return GAME_ID_RE.findall(response.text)


def screenshot_png(size=(32, 32)):
    buf = io.BytesIO()
    Image.new("RGB", size, (40, 120, 200)).save(buf, format="PNG")
    return buf.getvalue()
