import base64

import pytest

from gitfolio.errors import NotFound, RateLimitExceeded, RemoteError
from gitfolio.services.github_service import GitHubClient
from gitfolio.services.rate_limiter import RateLimiter

from conftest import FakeGitHub, FakeResponse, FakeSession, make_service, repo_payload


def make_client(handler, token="", rate_limiter=None):
    session = FakeSession(handler)
    return GitHubClient(rate_limiter or RateLimiter(), token=token, session=session), session


# ------------------------------------------------------------
# Client status mapping

def test_client_returns_parsed_json():
    client, session = make_client(lambda url: FakeResponse(200, {"login": "octocat"}))
    assert client.get(client.url("/users/octocat")) == {"login": "octocat"}
    assert session.calls[0]["url"] == "https://api.github.com/users/octocat"
    assert session.calls[0]["headers"]["Accept"] == "application/vnd.github.v3+json"
    assert "Authorization" not in session.calls[0]["headers"]


def test_client_sends_token_when_configured():
    client, session = make_client(lambda url: FakeResponse(200, {}), token="secret")
    client.get(client.url("/users/octocat"))
    assert session.calls[0]["headers"]["Authorization"] == "Bearer secret"


@pytest.mark.parametrize(
    "status, error",
    [(404, NotFound), (403, RateLimitExceeded), (500, RemoteError), (422, RemoteError)],
)
def test_client_maps_error_statuses(status, error):
    client, _ = make_client(lambda url: FakeResponse(status, {"message": "nope"}))
    with pytest.raises(error):
        client.get(client.url("/users/octocat"))


def test_remote_error_carries_status():
    client, _ = make_client(lambda url: FakeResponse(502))
    with pytest.raises(RemoteError) as excinfo:
        client.get(client.url("/users/octocat"))
    assert excinfo.value.status == 502
    assert str(excinfo.value) == "GitHub API error: 502"


def test_transport_failure_becomes_remote_error(connection_error):
    client, _ = make_client(lambda url: connection_error)
    with pytest.raises(RemoteError):
        client.get(client.url("/users/octocat"))


def test_invalid_json_becomes_remote_error():
    client, _ = make_client(lambda url: FakeResponse(200, invalid_json=True))
    with pytest.raises(RemoteError):
        client.get(client.url("/users/octocat"))


def test_rate_headers_are_recorded_before_status_is_interpreted():
    headers = {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "9999999999"}
    limiter = RateLimiter()
    client, session = make_client(lambda url: FakeResponse(403, headers=headers), rate_limiter=limiter)

    with pytest.raises(RateLimitExceeded) as first:
        client.get(client.url("/users/octocat"))
    assert first.value.retry_after_minutes is None
    assert limiter.state().remaining == 0

    with pytest.raises(RateLimitExceeded) as second:
        client.get(client.url("/users/octocat"))
    assert second.value.retry_after_minutes is not None
    # The second call is refused locally, without reaching the session.
    assert len(session.calls) == 1


# ------------------------------------------------------------
# Pagination

def test_short_first_page_needs_one_request():
    api = FakeGitHub("octocat", [repo_payload(f"repo-{i}") for i in range(30)])
    repos = make_service(api).fetch_repos("octocat")
    assert len(repos) == 30
    assert api.count("/repos") == 1


def test_exact_multiple_of_page_size_needs_an_extra_request():
    api = FakeGitHub("octocat", [repo_payload(f"repo-{i}") for i in range(200)])
    sleeps = []
    messages = []
    repos = make_service(api, sleep=sleeps.append).fetch_repos("octocat", messages.append)

    assert len(repos) == 200
    assert api.count("/repos") == 3
    assert messages == ["Fetched 100 repos...", "Fetched 200 repos..."]


def test_pages_are_paced():
    api = FakeGitHub("octocat", [repo_payload(f"repo-{i}") for i in range(150)])
    sleeps = []
    service = make_service(api, sleep=sleeps.append)
    service.page_delay = 0.1
    service.fetch_repos("octocat")
    assert sleeps == [0.1]


def test_repository_order_and_mapping_are_preserved():
    payloads = [repo_payload("zeta", stars=3, fork=True, topics=["cli"]), repo_payload("alpha")]
    repos = make_service(FakeGitHub("octocat", payloads)).fetch_repos("octocat")
    assert [repo.name for repo in repos] == ["zeta", "alpha"]
    assert repos[0].stars == 3
    assert repos[0].fork is True
    assert repos[0].topics == ("cli",)
    assert repos[0].url == "https://github.com/octocat/zeta"
    assert repos[0].language_data is None


def test_failure_mid_pagination_propagates():
    def handler(url):
        if "page=2" in url:
            return FakeResponse(500)
        return FakeResponse(200, [repo_payload(f"repo-{i}") for i in range(100)])

    with pytest.raises(RemoteError):
        make_service(handler).fetch_repos("octocat")


def test_missing_user_repos_raise_not_found():
    with pytest.raises(NotFound):
        make_service(FakeGitHub("someone-else", [])).fetch_repos("octocat")


# ------------------------------------------------------------
# Enrichment

def test_fetch_user_maps_identity():
    user = make_service(FakeGitHub("octocat", [])).fetch_user("octocat")
    assert user.login == "octocat"
    assert user.display_name == "The Octocat"
    assert user.location == "San Francisco"


def test_fetch_languages_returns_byte_counts():
    api = FakeGitHub("octocat", [], languages={"tool": {"Python": 900, "Shell": 100}})
    assert make_service(api).fetch_languages("octocat", "tool") == {"Python": 900, "Shell": 100}


def test_fetch_languages_degrades_to_empty_mapping():
    assert make_service(FakeGitHub("octocat", [])).fetch_languages("octocat", "missing") == {}


def test_fetch_languages_ignores_unexpected_payload():
    api = FakeGitHub("octocat", [], languages={"tool": ["Python"]})
    assert make_service(api).fetch_languages("octocat", "tool") == {}


def test_fetch_readme_decodes_and_extracts():
    readme = "# Title\n\n![badge](x)\n\nThis is **bold** and a [link](url)."
    api = FakeGitHub("octocat", [], readmes={"tool": readme})
    assert make_service(api).fetch_readme("octocat", "tool") == "This is bold and a link."


def test_fetch_readme_missing_is_none():
    assert make_service(FakeGitHub("octocat", [])).fetch_readme("octocat", "tool") is None


def test_fetch_readme_with_other_encoding_is_none():
    def handler(url):
        return FakeResponse(200, {"content": "plain text", "encoding": "utf-8"})

    assert make_service(handler).fetch_readme("octocat", "tool") is None


def test_fetch_readme_replaces_undecodable_bytes():
    content = base64.b64encode(b"Caf\xff menu").decode("ascii")

    def handler(url):
        return FakeResponse(200, {"content": content, "encoding": "base64"})

    assert make_service(handler).fetch_readme("octocat", "tool") == "Caf\ufffd menu"


def test_path_segments_are_quoted():
    api = FakeGitHub("octocat", [])
    make_service(api).fetch_languages("octocat", "name with space")
    assert api.paths[-1] == "/repos/octocat/name%20with%20space/languages"


def test_fetch_readme_drops_byte_order_mark():
    content = base64.b64encode("\ufeff# Title\n\nReal prose.".encode("utf-8")).decode("ascii")

    def handler(url):
        return FakeResponse(200, {"content": content, "encoding": "base64"})

    assert make_service(handler).fetch_readme("octocat", "tool") == "Real prose."
