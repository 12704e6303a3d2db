"""Per-profile user identity kept in a cookie file.

The board has no accounts: a random id is minted the first time it is
needed and stored as the ``user_id`` cookie, which every API call sends
back as its partition key.
"""
import logging
import threading
import time
import uuid
from http.cookiejar import LWPCookieJar
from pathlib import Path
from typing import Optional, Union

from requests.cookies import create_cookie

logger = logging.getLogger(__name__)

COOKIE_NAME = "user_id"
COOKIE_DAYS = 365
DEFAULT_COOKIE_FILE = Path("~/.taskboard/cookies.txt").expanduser()


class CookieIdentity:
    """Reads or lazily creates the ``user_id`` cookie in an LWP cookie file."""

    def __init__(self, cookie_file: Union[str, Path, None] = None, domain: str = "localhost"):
        self.cookie_file = Path(cookie_file) if cookie_file else DEFAULT_COOKIE_FILE
        self.domain = domain
        self.jar = LWPCookieJar(str(self.cookie_file))
        self._lock = threading.Lock()
        if self.cookie_file.exists():
            self.jar.load(ignore_discard=True)

    def _read(self) -> Optional[str]:
        for cookie in self.jar:
            if cookie.name == COOKIE_NAME and not cookie.is_expired():
                return cookie.value
        return None

    def get_user_id(self) -> str:
        # API calls run on worker threads; only one of them may mint the id
        with self._lock:
            return self._read() or self._mint()

    def _mint(self) -> str:
        user_id = str(uuid.uuid4())
        self.jar.set_cookie(create_cookie(
            COOKIE_NAME,
            user_id,
            domain=self.domain,
            path="/",
            expires=int(time.time()) + COOKIE_DAYS * 24 * 60 * 60,
        ))
        try:
            self.cookie_file.parent.mkdir(parents=True, exist_ok=True)
            self.jar.save(ignore_discard=True)
        except OSError as e:
            # Identity still holds for this process, it just won't survive a restart
            logger.debug(f"Could not write cookie file {self.cookie_file}: {e}")
        return user_id
