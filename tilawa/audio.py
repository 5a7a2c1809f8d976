"""
Per-verse recitation audio cache.

Files are named after the verse key ("2:255" -> "002255.mp3"), looked up
in a local cache directory, and fetched over HTTP on a miss.
"""

from pathlib import Path
from typing import Optional

import requests

from tilawa._logging import log_audio_downloaded
from tilawa.config import get_settings
from tilawa.exceptions import AudioDownloadError
from tilawa.models.verse import audio_filename


class AudioCache:
    """
    Local cache of verse recitation files.

    Args:
        cache_dir: Directory files are stored in (default: settings.audio_cache_dir)
        base_url: Remote directory files are fetched from (default: settings.audio_base_url)
        session: requests session to use for downloads
        timeout: HTTP timeout in seconds (default: settings.audio_timeout)
    """

    def __init__(
        self,
        cache_dir: Optional[str | Path] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.cache_dir = Path(cache_dir) if cache_dir is not None else Path(settings.audio_cache_dir)
        base = base_url if base_url is not None else settings.audio_base_url
        self.base_url = base if base.endswith("/") else base + "/"
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.audio_timeout

    def path_for(self, verse_key: str) -> Path:
        return self.cache_dir / audio_filename(verse_key)

    def url_for(self, verse_key: str) -> str:
        return self.base_url + audio_filename(verse_key)

    def is_cached(self, verse_key: str) -> bool:
        return self.path_for(verse_key).exists()

    def fetch(self, verse_key: str) -> Path:
        """
        Return the local file for a verse, downloading it if needed.

        Raises:
            InvalidVerseKeyError: If verse_key is malformed
            AudioDownloadError: If the download fails
        """
        path = self.path_for(verse_key)
        if path.exists():
            return path

        url = self.url_for(verse_key)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise AudioDownloadError(verse_key, url, reason=str(e))

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".part")
        try:
            tmp_path.write_bytes(response.content)
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        log_audio_downloaded(verse_key, str(path))
        return path

    def uri_for(self, verse_key: str) -> str:
        """Local file URI when cached, remote URL otherwise."""
        path = self.path_for(verse_key)
        if path.exists():
            return path.resolve().as_uri()
        return self.url_for(verse_key)

    def evict(self, verse_key: str) -> bool:
        """Delete a cached file. Returns whether one was removed."""
        path = self.path_for(verse_key)
        if path.exists():
            path.unlink()
            return True
        return False

    def close(self) -> None:
        """Close the HTTP session if this cache created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "AudioCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
