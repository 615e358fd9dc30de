#------------------------------------------------------------
#                      github_service.py
#          Handles GitHub API requests, pagination and
#                 per-repository enrichment.

import base64
import binascii
import logging
import time
from typing import Callable, Dict, List, Optional
from urllib.parse import quote
import requests
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_REPOS_PER_PAGE,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
    PAGE_DELAY_SECONDS,
)
from ..errors import GitfolioError, NotFound, RateLimitExceeded, RemoteError
from ..models import Repository, UserIdentity
from .description_service import extract_first_paragraph
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str], None]]

USER_ENDPOINT_TEMPLATE = "/users/{username}"
USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
LANGUAGES_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/languages"
README_ENDPOINT_TEMPLATE = "/repos/{owner}/{repo}/readme"
REPO_QUERY_TEMPLATE = "{base}?per_page={per_page}&page={page}&sort=updated"

PAGE_RESULT_MESSAGE = "Page %d: found %d repositories"
FETCHED_PROGRESS_TEMPLATE = "Fetched {count} repos..."
LANGUAGES_SKIPPED_MESSAGE = "No language data for %s/%s: %s"
README_SKIPPED_MESSAGE = "No readme excerpt for %s/%s: %s"

README_EXPECTED_ENCODING = "base64"
README_DECODE_ENCODING = "utf-8-sig"
README_DECODE_ERROR_MODE = "replace"


def _segment(value: str) -> str:
    return quote(value, safe="")


class GitHubClient:
    """Issues single GETs against the REST API.

    The rate limiter is consulted before every dispatch and updated from every
    response, error responses included, before the status is interpreted.
    """

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        token: str = "",
        session=None,
        base_url: str = GITHUB_API_BASE_URL,
        timeout: float = GITHUB_REQUEST_TIMEOUT_SECONDS,
    ):
        self.rate_limiter = rate_limiter or RateLimiter()
        self.token = token
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # This function does build request headers for GitHub API calls.
    # It adds auth headers when a token is configured.
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT_HEADER}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def get(self, url: str):
        self.rate_limiter.check_and_throttle()
        try:
            response = self.session.get(url, headers=self.headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteError(detail=str(exc)) from exc

        self.rate_limiter.record_response(response.headers)

        if response.status_code == 404:
            raise NotFound()
        if response.status_code == 403:
            raise RateLimitExceeded()
        if not 200 <= response.status_code < 300:
            raise RemoteError(response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(detail=f"invalid JSON from {url}") from exc


class GitHubService:

    def __init__(
        self,
        client: GitHubClient,
        page_size: int = GITHUB_REPOS_PER_PAGE,
        page_delay: float = PAGE_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.page_size = page_size
        self.page_delay = page_delay
        self.sleep = sleep

    def fetch_user(self, username: str) -> UserIdentity:
        payload = self.client.get(self.client.url(USER_ENDPOINT_TEMPLATE.format(username=_segment(username))))
        try:
            return UserIdentity.from_api(payload)
        except ValueError as exc:
            raise RemoteError(detail=str(exc)) from exc

    # This function does fetch every public repository of a user.
    # Pages are requested in order until a short or empty page arrives.
    def fetch_repos(self, username: str, on_progress: ProgressCallback = None) -> List[Repository]:
        base_url = self.client.url(USER_REPOS_ENDPOINT_TEMPLATE.format(username=_segment(username)))
        repos: List[Repository] = []
        page = 1

        while True:
            url = REPO_QUERY_TEMPLATE.format(base=base_url, per_page=self.page_size, page=page)
            data = self.client.get(url)
            if not isinstance(data, list):
                raise RemoteError(detail=f"unexpected repository listing on page {page}")
            if not data:
                break

            logger.info(PAGE_RESULT_MESSAGE, page, len(data))
            try:
                repos.extend(Repository.from_api(item) for item in data)
            except (TypeError, ValueError) as exc:
                raise RemoteError(detail=f"malformed repository on page {page}: {exc}") from exc

            if on_progress:
                on_progress(FETCHED_PROGRESS_TEMPLATE.format(count=len(repos)))

            if len(data) < self.page_size:
                break
            page += 1
            if self.page_delay:
                self.sleep(self.page_delay)

        return repos

    # This function does fetch language byte counts for a repository.
    # Any failure degrades to an empty mapping.
    def fetch_languages(self, owner: str, repo: str) -> Dict[str, int]:
        url = self.client.url(LANGUAGES_ENDPOINT_TEMPLATE.format(owner=_segment(owner), repo=_segment(repo)))
        try:
            languages = self.client.get(url)
        except GitfolioError as exc:
            logger.info(LANGUAGES_SKIPPED_MESSAGE, owner, repo, exc)
            return {}

        if not isinstance(languages, dict):
            return {}
        usage: Dict[str, int] = {}
        for language, byte_count in languages.items():
            try:
                usage[str(language)] = int(byte_count)
            except (TypeError, ValueError):
                continue
        return usage

    # This function does fetch and decode a repository README.
    # It returns an excerpt, or None when there is no usable readme.
    def fetch_readme(self, owner: str, repo: str) -> Optional[str]:
        url = self.client.url(README_ENDPOINT_TEMPLATE.format(owner=_segment(owner), repo=_segment(repo)))
        try:
            data = self.client.get(url)
        except GitfolioError as exc:
            logger.info(README_SKIPPED_MESSAGE, owner, repo, exc)
            return None

        if not isinstance(data, dict):
            return None
        content = data.get("content")
        encoding = data.get("encoding") or README_EXPECTED_ENCODING
        if not isinstance(content, str) or encoding != README_EXPECTED_ENCODING:
            return None

        try:
            decoded = base64.b64decode(content).decode(README_DECODE_ENCODING, errors=README_DECODE_ERROR_MODE)
        except (binascii.Error, ValueError) as exc:
            logger.info(README_SKIPPED_MESSAGE, owner, repo, exc)
            return None

        return extract_first_paragraph(decoded)
