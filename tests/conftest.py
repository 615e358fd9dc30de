import base64
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from gitfolio.models import Repository, UserData, UserIdentity
from gitfolio.services.cache_service import CacheService
from gitfolio.services.github_service import GitHubClient, GitHubService
from gitfolio.services.rate_limiter import RateLimiter
from gitfolio.controller import Aggregator


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; routes every GET through a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        result = self.handler(url)
        if isinstance(result, Exception):
            raise result
        return result


class FakeGitHub:
    """A tiny in-memory GitHub REST API for one account."""

    def __init__(self, username, repos, languages=None, readmes=None, user=None, headers=None):
        self.username = username
        self.repos = repos
        self.languages = languages or {}
        self.readmes = readmes or {}
        self.user = user or {
            "login": username,
            "name": "The Octocat",
            "avatar_url": "https://avatars.example/octocat.png",
            "html_url": f"https://github.com/{username}",
            "bio": "Builds things.",
            "location": "San Francisco",
        }
        self.headers = headers or {}
        self.paths = []

    def __call__(self, url):
        parts = urlsplit(url)
        path = parts.path
        self.paths.append(path)
        segments = path.strip("/").split("/")

        if segments == ["users", self.username]:
            return self._ok(self.user)
        if segments == ["users", self.username, "repos"]:
            query = parse_qs(parts.query)
            page = int(query["page"][0])
            per_page = int(query["per_page"][0])
            start = (page - 1) * per_page
            return self._ok(self.repos[start:start + per_page])
        if len(segments) == 4 and segments[0] == "repos" and segments[3] == "languages":
            if segments[2] in self.languages:
                return self._ok(self.languages[segments[2]])
            return FakeResponse(404, {"message": "Not Found"}, self.headers)
        if len(segments) == 4 and segments[0] == "repos" and segments[3] == "readme":
            if segments[2] in self.readmes:
                content = base64.b64encode(self.readmes[segments[2]].encode("utf-8")).decode("ascii")
                return self._ok({"content": content, "encoding": "base64"})
            return FakeResponse(404, {"message": "Not Found"}, self.headers)
        return FakeResponse(404, {"message": "Not Found"}, self.headers)

    def _ok(self, payload):
        return FakeResponse(200, payload, self.headers)

    def count(self, suffix):
        return sum(1 for path in self.paths if path.endswith(suffix))


def repo_payload(name, stars=0, fork=False, updated_at="2024-01-01T00:00:00Z", **extra):
    payload = {
        "name": name,
        "html_url": f"https://github.com/octocat/{name}",
        "description": f"{name} description",
        "homepage": None,
        "stargazers_count": stars,
        "forks_count": 0,
        "fork": fork,
        "topics": [],
        "updated_at": updated_at,
        "language": "Python",
    }
    payload.update(extra)
    return payload


def make_repo(name, **fields):
    fields.setdefault("url", f"https://github.com/octocat/{name}")
    return Repository(name=name, **fields)


def make_user_data(repos, username="octocat", last_fetch=1000.0, **user):
    user.setdefault("name", "The Octocat")
    user.setdefault("avatar_url", "https://avatars.example/octocat.png")
    user.setdefault("html_url", f"https://github.com/{username}")
    return UserData(
        username=username,
        user_info=UserIdentity(login=username, **user),
        repos=tuple(repos),
        last_fetch=last_fetch,
    )


def make_service(handler, rate_limiter=None, sleep=None):
    client = GitHubClient(rate_limiter or RateLimiter(), session=FakeSession(handler))
    return GitHubService(client, page_delay=0, sleep=sleep or (lambda seconds: None))


def make_aggregator(api, cache=None):
    return Aggregator(github_service=make_service(api), cache=cache or CacheService(), enrich_delay=0)


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
