import json

import pytest

from models import Credentials

CASE_ID = "c4e64338-37c7-11ec-8d3d-0242ac130003"
QUEUE_ID = "b8ce0ab6-cd6f-4bc7-ab6b-c125b8f31b86"
API = f"https://inpol.mazowieckie.pl/api/reservations/queue/{QUEUE_ID}"


class FakeResponse:
    def __init__(self, status_code, payload=None, url="", text=None):
        self.status_code = status_code
        self._payload = payload
        self.url = url
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays canned responses per (method, url) and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, url, *responses):
        self.routes.setdefault((method, url), []).extend(responses)

    def _send(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        queue = self.routes.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        resp = queue.pop(0) if len(queue) > 1 else queue[0]
        resp.url = url
        return resp

    def get(self, url, **kwargs):
        return self._send("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._send("POST", url, **kwargs)

    def urls(self, method):
        return [url for m, url, _ in self.calls if m == method]


class Delay:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def delay():
    return Delay()


@pytest.fixture
def credentials():
    return Credentials(CASE_ID, QUEUE_ID, "secret-token")


@pytest.fixture
def profile_payload():
    return {
        "firstName": "Jan",
        "surname": "Kowalski",
        "dateOfBirth": "1990-01-01",
        "email": "jan@example.com",
    }
