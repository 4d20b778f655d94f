import json
import threading

import pytest
import requests

import genomics_tools as gt
from genomics_tools.adapters.requests_dispatcher import RequestsDispatcher
from genomics_tools.descriptors import ResolvedRequest

OPTIONS = gt.ClientOptions(base_url="https://genomics.googleapis.com", token="tok", timeout=7)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.content = text.encode()

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, response):
        self.headers = {}
        self.response = response
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.response

    def close(self):
        self.closed = True


def test_send_success_and_auth_header():
    session = FakeSession(FakeResponse(200, {"id": "D1", "name": "my dataset"}))
    with RequestsDispatcher(OPTIONS, session=session) as dispatcher:
        req = ResolvedRequest("GET", "https://genomics.googleapis.com/v1/datasets/D1")
        result = dispatcher.dispatch(req, OPTIONS).result()
    assert result == {"id": "D1", "name": "my dataset"}
    assert session.headers["Authorization"] == "Bearer tok"
    assert session.calls == [{
        "method": "GET",
        "url": "https://genomics.googleapis.com/v1/datasets/D1",
        "params": None,
        "json": None,
        "timeout": 7,
    }]
    assert session.closed


def test_query_and_body_are_forwarded():
    session = FakeSession(FakeResponse(200, {"id": "D1"}))
    with RequestsDispatcher(OPTIONS, session=session) as dispatcher:
        req = ResolvedRequest("PATCH", "https://x/v1/datasets/D1", (("updateMask", "name"),), {"name": "n"})
        dispatcher.send(req, OPTIONS)
    call = session.calls[0]
    assert call["params"] == [("updateMask", "name")]
    assert call["json"] == {"name": "n"}


def test_empty_body_decodes_to_empty_dict():
    session = FakeSession(FakeResponse(200))
    with RequestsDispatcher(OPTIONS, session=session) as dispatcher:
        req = ResolvedRequest("DELETE", "https://x/v1/callsets/C1")
        assert dispatcher.dispatch(req, OPTIONS).result() == {}


def test_api_error_surfaces_through_future():
    envelope = {"error": {"code": 404, "message": "Dataset D9 not found", "status": "NOT_FOUND"}}
    session = FakeSession(FakeResponse(404, envelope))
    with RequestsDispatcher(OPTIONS, session=session) as dispatcher:
        future = dispatcher.dispatch(ResolvedRequest("GET", "https://x/v1/datasets/D9"), OPTIONS)
        with pytest.raises(gt.GenomicsApiError) as exc:
            future.result()
    assert exc.value.status_code == 404
    assert exc.value.message == "Dataset D9 not found"
    assert exc.value.url == "https://x/v1/datasets/D9"


def test_api_error_without_json_uses_text():
    session = FakeSession(FakeResponse(502, text="Bad Gateway"))
    with RequestsDispatcher(OPTIONS, session=session) as dispatcher:
        with pytest.raises(gt.GenomicsApiError) as exc:
            dispatcher.send(ResolvedRequest("GET", "https://x/v1/reads/search"), OPTIONS)
    assert exc.value.message == "Bad Gateway"


def test_client_with_default_dispatcher():
    session = FakeSession(FakeResponse(200, {}))
    options = gt.ClientOptions(base_url="https://genomics.googleapis.com", token=None)
    with RequestsDispatcher(options, session=session) as dispatcher, gt.Genomics(options, dispatcher=dispatcher) as client:
        client.operations.cancel(name="operations/O1").result()
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["url"] == "https://genomics.googleapis.com/v1/operations/O1:cancel"
    assert "Authorization" not in session.headers


class GatedSession(FakeSession):
    """Holds each request until ``release`` is set."""

    def __init__(self, response):
        super().__init__(response)
        self.release = threading.Event()

    def request(self, method, url, **kwargs):
        self.release.wait(5)
        return super().request(method, url, **kwargs)


def test_callback_runs_on_worker_thread():
    session = GatedSession(FakeResponse(200, {"id": "V1"}))
    options = gt.ClientOptions(base_url="https://genomics.googleapis.com", token=None)
    threads = []
    done = threading.Event()

    def on_done(future):
        threads.append(threading.current_thread().name)
        done.set()

    with RequestsDispatcher(options, session=session) as dispatcher, gt.Genomics(options, dispatcher=dispatcher) as client:
        future = client.variants.merge(resource={"variantSetId": "VS1"}, callback=on_done)
        session.release.set()
        future.result()
        assert done.wait(5)
    assert len(threads) == 1
    assert threads[0].startswith("genomics")
    assert session.calls[0]["json"] == {"variantSetId": "VS1"}


def test_client_closes_only_its_own_dispatcher():
    options = gt.ClientOptions(base_url="https://genomics.googleapis.com", token=None)
    client = gt.Genomics(options)
    client.close()
    with pytest.raises(RuntimeError):
        client.dispatcher.executor.submit(lambda: None)

    session = FakeSession(FakeResponse(200, {}))
    injected = RequestsDispatcher(options, session=session)
    gt.Genomics(options, dispatcher=injected).close()
    assert not session.closed
    injected.close()
    assert session.closed
