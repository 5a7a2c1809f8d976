"""Tests for the recitation audio cache."""

from pathlib import Path

import pytest
import requests

from tilawa import audio as audio_module
from tilawa.audio import AudioCache
from tilawa.exceptions import AudioDownloadError, InvalidVerseKeyError


class StubResponse:
    def __init__(self, content=b"ID3audio", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response or StubResponse()
        self.error = error
        self.requested = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def session():
    return StubSession()


@pytest.fixture
def cache(tmp_path, session):
    return AudioCache(
        cache_dir=tmp_path / "audio",
        base_url="https://audio.example/Alafasy_128kbps",
        session=session,
        timeout=5,
    )


def test_paths_and_urls(cache, tmp_path):
    assert cache.path_for("2:255") == tmp_path / "audio" / "002255.mp3"
    assert cache.url_for("1:1") == "https://audio.example/Alafasy_128kbps/001001.mp3"


def test_fetch_downloads_once(cache, session):
    assert not cache.is_cached("1:1")
    path = cache.fetch("1:1")
    assert path.read_bytes() == b"ID3audio"
    assert cache.is_cached("1:1")

    cache.fetch("1:1")
    assert session.requested == [("https://audio.example/Alafasy_128kbps/001001.mp3", 5)]


def test_uri_prefers_local_file(cache):
    assert cache.uri_for("1:2").startswith("https://")
    cache.fetch("1:2")
    assert cache.uri_for("1:2").startswith("file://")


def test_http_error(tmp_path):
    cache = AudioCache(
        cache_dir=tmp_path,
        base_url="https://audio.example/",
        session=StubSession(StubResponse(status_code=404)),
    )
    with pytest.raises(AudioDownloadError) as exc:
        cache.fetch("114:6")
    assert exc.value.url == "https://audio.example/114006.mp3"
    assert not cache.is_cached("114:6")


def test_connection_error(tmp_path):
    cache = AudioCache(
        cache_dir=tmp_path,
        session=StubSession(error=requests.ConnectionError("offline")),
    )
    with pytest.raises(AudioDownloadError):
        cache.fetch("1:1")


def test_defaults_from_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("TILAWA_AUDIO_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("TILAWA_AUDIO_BASE_URL", "https://mirror.example/data")
    cache = AudioCache(session=StubSession())
    assert cache.path_for("1:1") == tmp_path / "001001.mp3"
    assert cache.url_for("1:1") == "https://mirror.example/data/001001.mp3"
    assert cache.timeout == 30.0


def test_evict(cache):
    cache.fetch("3:7")
    assert cache.evict("3:7") is True
    assert cache.evict("3:7") is False


def test_invalid_key(cache):
    with pytest.raises(InvalidVerseKeyError):
        cache.fetch("not-a-key")


def test_failed_write_leaves_no_partial_file(cache, monkeypatch):
    def fail_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)
    with pytest.raises(OSError):
        cache.fetch("2:1")
    assert not cache.is_cached("2:1")
    assert list(cache.cache_dir.iterdir()) == []


def test_context_manager_closes_own_session(tmp_path, monkeypatch):
    monkeypatch.setattr(audio_module.requests, "Session", StubSession)
    with AudioCache(cache_dir=tmp_path) as cache:
        session = cache.session
        assert session.closed is False
    assert session.closed is True


def test_close_leaves_caller_session_open(cache, session):
    cache.close()
    assert session.closed is False
