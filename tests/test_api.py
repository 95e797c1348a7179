import json
import pytest
import requests
from conftest import FakeResponse
from hub_scanner.api import HubClient, discussion_url, file_blob_url
from hub_scanner.errors import HubAPIError, ParseError, RateLimitExhaustedError, TransportError
from hub_scanner.models import ResourceKind
from hub_scanner.tokens import TokenRotator
URL = "https://hub.test/api/models/org/model"
def test_request_attaches_current_token(client, session):
    session.routes[URL] = FakeResponse(200, b"{}")
    assert client.request(URL) == b"{}"
    assert session.calls[0]["headers"]["Authorization"] == "Bearer tok_a"
def test_empty_rotator_sends_no_authorization(session):
    client = HubClient(rotator=TokenRotator(), base_url="https://hub.test", session=session)
    session.routes[URL] = FakeResponse(200, b"ok")
    client.request(URL)
    assert "Authorization" not in session.calls[0]["headers"]
def test_throttle_rotates_and_retries(client, session):
    session.routes[URL] = [FakeResponse(429), FakeResponse(200, b"done")]
    assert client.request(URL) == b"done"
    tokens = [c["headers"]["Authorization"] for c in session.calls]
    assert tokens == ["Bearer tok_a", "Bearer tok_b"]
def test_unauthorized_also_rotates(client, session):
    session.routes[URL] = [FakeResponse(401), FakeResponse(200, b"x")]
    client.request(URL)
    assert client.rotator.current() == "tok_b"
@pytest.mark.parametrize("retries", [1, 3, 5, 7])
def test_always_throttled_fails_after_exactly_max_retries(client, session, retries):
    session.routes[URL] = FakeResponse(429)
    with pytest.raises(RateLimitExhaustedError):
        client.request(URL, max_retries=retries)
    assert len(session.calls) == retries
def test_backoff_after_full_rotation(client, session, sleeps):
    session.routes[URL] = FakeResponse(429)
    with pytest.raises(RateLimitExhaustedError):
        client.request(URL)
    # three tokens: one pause once every token has been tried
    assert sleeps == [2]
def test_other_status_fails_without_retry(client, session):
    session.routes[URL] = FakeResponse(500, b"boom")
    with pytest.raises(HubAPIError) as exc:
        client.request(URL)
    assert exc.value.status == 500
    assert exc.value.body == "boom"
    assert exc.value.category == "upstream"
    assert len(session.calls) == 1
def test_transport_error_propagates_immediately(client, session, transport_error):
    session.routes[URL] = transport_error
    with pytest.raises(TransportError) as exc:
        client.request(URL)
    assert exc.value.context["url"] == URL
    assert len(session.calls) == 1
def test_malformed_json_is_parse_error(client, session):
    session.routes[URL] = FakeResponse(200, b"{not json")
    with pytest.raises(ParseError):
        client.get_json(URL)
def test_large_body_is_returned_whole(client, session):
    body = b"x" * (11 * 1024 * 1024)
    response = FakeResponse(200, body)
    session.routes[URL] = response
    assert client.request(URL) == body
    assert response.closed
def test_large_json_listing_parses(client, session):
    url = "https://hub.test/api/models?author=acme&full=true"
    entries = [{"id": f"acme/model-{i}", "cardData": "d" * 2048} for i in range(6000)]
    session.routes[url] = FakeResponse(200, json.dumps(entries))
    ids = client.list_org_resources("models", "acme")
    assert len(ids) == 6000
    assert ids[-1] == "acme/model-5999"
class BrokenStreamResponse(FakeResponse):
    def iter_content(self, chunk_size=8192):
        yield b"partial"
        raise requests.exceptions.ChunkedEncodingError("connection reset")
def test_failed_body_read_closes_response(client, session):
    response = BrokenStreamResponse(200)
    session.routes[URL] = response
    with pytest.raises(TransportError):
        client.request(URL)
    assert response.closed
def test_fetch_metadata_reads_siblings(client, session):
    payload = {"id": "org/model", "siblings": [{"rfilename": "config.json"}, {"rfilename": 3}, {}]}
    session.routes[URL] = FakeResponse(200, json.dumps(payload))
    meta = client.fetch_metadata("model", "org/model")
    assert meta.id == "org/model"
    assert [s.name for s in meta.siblings] == ["config.json"]
def test_fetch_discussions_accepts_wrapped_payload(client, session):
    url = "https://hub.test/api/models/org/model/discussions?types=pr&status=all"
    payload = {"discussions": [{"num": 4, "title": "Fix", "isPullRequest": True,
                                "author": {"name": "alice"}, "repo": {"name": "org/model"}}]}
    session.routes[url] = FakeResponse(200, json.dumps(payload))
    items = client.fetch_discussions(ResourceKind.MODEL, "org/model", "pr")
    assert items[0].number == 4
    assert items[0].is_pull_request is True
    assert items[0].author_name == "alice"
    assert items[0].repo_name == "org/model"
    assert items[0].num_comments == 0
def test_list_org_resources(client, session):
    url = "https://hub.test/api/datasets?author=acme&full=true"
    session.routes[url] = FakeResponse(200, json.dumps([{"id": "acme/a"}, {"id": ""}, {"x": 1}, {"id": "acme/b"}]))
    assert client.list_org_resources("dataset", "acme") == ["acme/a", "acme/b"]
def test_url_builders(client):
    assert client.raw_file_url("org/m", "dir/a b.txt") == "https://hub.test/org/m/resolve/main/dir/a%20b.txt"
    assert client.discussions_url("space", "org/s", "discussion") == (
        "https://hub.test/api/spaces/org/s/discussions?types=discussion&status=all")
    assert file_blob_url("https://hub.test", "org/m", "a.py", 3) == "https://hub.test/org/m/blob/main/a.py?line=3"
    assert file_blob_url("https://hub.test", "org/m", "a.py", 0) == "https://hub.test/org/m/blob/main/a.py"
    assert discussion_url("https://hub.test", "datasets", "org/d", 7) == "https://hub.test/datasets/org/d/discussions/7"
