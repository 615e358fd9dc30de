#------------------------------------------------------------
#                        controller.py
#        Coordinates cache, GitHub fetches and enrichment
#        into one snapshot, and drives a full export run.

import logging
import math
import re
import threading
import time
from typing import Callable, List, Optional
from .config import (
    ENRICH_DELAY_SECONDS,
    LANGUAGE_ENRICH_LIMIT,
    README_ENRICH_LIMIT,
    USERNAME_PATTERN,
    resolve_cache_path,
    resolve_github_token,
    resolve_output_dir,
    resolve_settings_path,
)
from .errors import InvalidUsername, NoPublicRepos
from .models import RateLimitState, Repository, Settings, TemplateKind, UserData
from .services.cache_service import CacheService
from .services.export_service import ExportPipeline
from .services.github_service import GitHubClient, GitHubService, ProgressCallback
from .services.rate_limiter import RateLimiter
from .services.settings_service import load_settings, save_settings

logger = logging.getLogger(__name__)

CACHED_DATA_MESSAGE = "Using cached data..."
FETCHING_USER_MESSAGE = "Fetching user info..."
FETCHING_REPOS_MESSAGE = "Fetching repositories..."
FETCHING_LANGUAGES_MESSAGE = "Fetching language data..."
PROCESSING_PROGRESS_TEMPLATE = "Processing repos... {percent}%"
FETCH_SUMMARY_MESSAGE = "Fetched %d repositories for %s (%d enriched)"


def validate_username(username: str) -> str:
    cleaned = (username or "").strip()
    if not re.match(USERNAME_PATTERN, cleaned):
        raise InvalidUsername(username)
    return cleaned


class Aggregator:
    """Builds a ``UserData`` snapshot for one account.

    The rate limiter (through the client) and the cache belong to this
    instance. Calls are serialized: a second caller waits for the in-flight
    fetch to finish.
    """

    def __init__(
        self,
        github_service: Optional[GitHubService] = None,
        cache: Optional[CacheService] = None,
        rate_limiter: Optional[RateLimiter] = None,
        enrich_delay: float = ENRICH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        if github_service is None:
            rate_limiter = rate_limiter or RateLimiter(clock=clock)
            github_service = GitHubService(GitHubClient(rate_limiter, token=resolve_github_token()), sleep=sleep)
        self.github_service = github_service
        self.rate_limiter = github_service.client.rate_limiter
        self.cache = cache or CacheService(clock=clock)
        self.enrich_delay = enrich_delay
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()

    def fetch_user_data(self, username: str, on_progress: ProgressCallback = None) -> UserData:
        username = validate_username(username)
        with self._lock:
            return self._fetch(username, on_progress or _ignore_progress)

    def _fetch(self, username: str, report: Callable[[str], None]) -> UserData:
        cached = self.cache.get(username)
        if cached is not None:
            report(CACHED_DATA_MESSAGE)
            return cached

        report(FETCHING_USER_MESSAGE)
        user_info = self.github_service.fetch_user(username)

        report(FETCHING_REPOS_MESSAGE)
        repos = self.github_service.fetch_repos(username, report)
        if not repos:
            raise NoPublicRepos(username)

        report(FETCHING_LANGUAGES_MESSAGE)
        enriched = self._enrich(username, repos, report)

        user_data = UserData(
            username=username,
            user_info=user_info,
            repos=tuple(enriched),
            last_fetch=self._clock(),
        )
        self.cache.put(username, user_data)
        logger.info(FETCH_SUMMARY_MESSAGE, len(enriched), username, min(len(enriched), LANGUAGE_ENRICH_LIMIT))
        return user_data

    # This function does add language and readme data to the newest repos.
    # Only the first entries by recency are enriched, one request at a time.
    def _enrich(self, owner: str, repos: List[Repository], report: Callable[[str], None]) -> List[Repository]:
        head = repos[:LANGUAGE_ENRICH_LIMIT]
        enriched: List[Repository] = []
        for index, repo in enumerate(head):
            language_data = self.github_service.fetch_languages(owner, repo.name)
            readme_excerpt = None
            if index < README_ENRICH_LIMIT:
                readme_excerpt = self.github_service.fetch_readme(owner, repo.name)
            enriched.append(repo.enriched(language_data, readme_excerpt))

            percent = int(math.floor((index + 1) / len(head) * 100 + 0.5))
            report(PROCESSING_PROGRESS_TEMPLATE.format(percent=percent))
            if self.enrich_delay:
                self._sleep(self.enrich_delay)
        return enriched + repos[LANGUAGE_ENRICH_LIMIT:]

    def rate_limit_info(self) -> RateLimitState:
        return self.rate_limiter.state()

    def clear_cache(self) -> None:
        self.cache.clear()


def _ignore_progress(message: str) -> None:
    pass


def _log_progress(message: str) -> None:
    logger.info(message)


# This function does execute the full export workflow end-to-end.
# It merges settings, fetches the snapshot, and writes the output files.
def run_build(
    username: str,
    template: TemplateKind = TemplateKind.MINIMAL,
    overrides: Optional[dict] = None,
    output: Optional[str] = None,
    write_sitemap: bool = False,
    write_robots: bool = False,
    use_cache: bool = True,
    clear_cache: bool = False,
    size_only: bool = False,
    aggregator: Optional[Aggregator] = None,
    settings_path: Optional[str] = None,
) -> ExportPipeline:
    settings_path = settings_path or resolve_settings_path()
    settings: Settings = load_settings(settings_path)
    if overrides:
        settings = settings.updated(**overrides)
        save_settings(settings_path, settings)

    if aggregator is None:
        aggregator = Aggregator(cache=CacheService(resolve_cache_path() if use_cache else None))
    if clear_cache:
        aggregator.clear_cache()

    user_data = aggregator.fetch_user_data(username, _log_progress)
    pipeline = ExportPipeline(user_data, settings, template)
    if size_only:
        return pipeline

    output_dir = resolve_output_dir()
    pipeline.download(output, directory=None if output else output_dir)
    if write_sitemap:
        pipeline.write_sitemap(directory=output_dir)
    if write_robots:
        pipeline.write_robots(directory=output_dir)
    return pipeline
