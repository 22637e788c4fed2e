import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

WUNDERGROUND_CURL = (
    "curl 'https://www.wunderground.com/forecast/us/ma/waltham' "
    "-H 'authority: www.wunderground.com' "
    "-H 'upgrade-insecure-requests: 1' "
    "-H 'user-agent: Mozilla/5.0 (X11; Fedora; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/79.0.3945.117 Safari/537.36' "
    "-H 'accept: text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,"
    "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.9' "
    "-H 'sec-fetch-site: none' "
    "-H 'sec-fetch-mode: navigate' "
    "-H 'accept-encoding: gzip, deflate, br' "
    "-H 'accept-language: en-US,en;q=0.9' --compressed"
)

PRIVNOTE_BODY = (
    "&data=U2FsdGVkX1%2BOxTSDTgLVqVwnRWjcvJ8AVWWZJkN456o%3D%0A&has_manual_pass=false"
    "&duration_hours=0&dont_ask=false&data_type=T&notify_email=&notify_ref="
)

PRIVNOTE_CURL = (
    "curl 'https://privnote.com/legacy/' "
    "-H 'Connection: keep-alive' "
    "-H 'Origin: https://privnote.com' "
    "-H 'X-Requested-With: XMLHttpRequest' "
    "-H 'User-Agent: Mozilla/5.0 (X11; Fedora; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/79.0.3945.117 Safari/537.36' "
    "-H 'Content-type: application/x-www-form-urlencoded' "
    "-H 'Accept: */*' "
    "-H 'Sec-Fetch-Site: same-origin' "
    "-H 'Sec-Fetch-Mode: cors' "
    "-H 'Referer: https://privnote.com/' "
    "-H 'Accept-Encoding: gzip, deflate, br' "
    "-H 'Accept-Language: en-US,en;q=0.9' "
    f"--data '{PRIVNOTE_BODY}' --compressed"
)


@pytest.fixture
def wunderground_curl() -> str:
    return WUNDERGROUND_CURL


@pytest.fixture
def privnote_curl() -> str:
    return PRIVNOTE_CURL


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in ("UNCURL_LOG_LEVEL", "UNCURL_LOG_FILE", "UNCURL_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def privnote_body() -> str:
    return PRIVNOTE_BODY
