#------------------------------------------------------------
#                          models.py
#     Defines the dataclasses shared by the fetch, render
#                    and export pipeline.

import math
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple
from .config import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_FILTER_NO_FORKS,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SORT_BY,
    FEATURED_LIMIT,
)


class TemplateKind(str, Enum):
    MINIMAL = "minimal"
    DARK = "dark"
    CREATIVE = "creative"


class SortKey(str, Enum):
    STARS = "stars"
    UPDATED = "updated"
    NAME = "name"


@dataclass(frozen=True)
class UserIdentity:
    login: str
    name: str = ""
    avatar_url: str = ""
    html_url: str = ""
    bio: str = ""
    location: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.login

    # This function does build an identity from a /users/{username} payload.
    # Null API fields become empty strings.
    @classmethod
    def from_api(cls, payload: dict) -> "UserIdentity":
        if not isinstance(payload, dict) or not payload.get("login"):
            raise ValueError("user payload has no login")
        return cls(
            login=str(payload["login"]),
            name=payload.get("name") or "",
            avatar_url=payload.get("avatar_url") or "",
            html_url=payload.get("html_url") or "",
            bio=payload.get("bio") or "",
            location=payload.get("location") or "",
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Repository:
    name: str
    url: str = ""
    description: Optional[str] = None
    homepage: Optional[str] = None
    stars: int = 0
    forks: int = 0
    fork: bool = False
    topics: Tuple[str, ...] = ()
    updated_at: str = ""
    language: Optional[str] = None
    language_data: Optional[Dict[str, int]] = None
    readme_excerpt: Optional[str] = None

    # This function does build a repository from a repos-listing entry.
    # It also reads back the enrichment keys written by to_dict.
    @classmethod
    def from_api(cls, payload: dict) -> "Repository":
        if not isinstance(payload, dict) or not payload.get("name"):
            raise ValueError("repository payload has no name")
        language_data = payload.get("languageData")
        if language_data is not None:
            if not isinstance(language_data, dict):
                raise ValueError("languageData must be a mapping")
            language_data = {str(key): int(value) for key, value in language_data.items()}
        return cls(
            name=str(payload["name"]),
            url=payload.get("html_url") or "",
            description=payload.get("description") or None,
            homepage=payload.get("homepage") or None,
            stars=int(payload.get("stargazers_count") or 0),
            forks=int(payload.get("forks_count") or 0),
            fork=bool(payload.get("fork")),
            topics=tuple(str(topic) for topic in payload.get("topics") or ()),
            updated_at=payload.get("updated_at") or "",
            language=payload.get("language") or None,
            language_data=language_data,
            readme_excerpt=payload.get("readmeExcerpt"),
        )

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "html_url": self.url,
            "description": self.description,
            "homepage": self.homepage,
            "stargazers_count": self.stars,
            "forks_count": self.forks,
            "fork": self.fork,
            "topics": list(self.topics),
            "updated_at": self.updated_at,
            "language": self.language,
        }
        if self.language_data is not None:
            data["languageData"] = dict(self.language_data)
        if self.readme_excerpt is not None:
            data["readmeExcerpt"] = self.readme_excerpt
        return data

    def enriched(self, language_data: Dict[str, int], readme_excerpt: Optional[str] = None) -> "Repository":
        return replace(self, language_data=language_data, readme_excerpt=readme_excerpt)


@dataclass(frozen=True)
class UserData:
    """One aggregation pass: identity, repositories and their enrichment.

    ``last_fetch`` is a wall-clock epoch in seconds. The persisted record keeps
    milliseconds under ``lastFetch`` so it stays compatible with records
    written by the browser build.
    """

    username: str
    user_info: UserIdentity
    repos: Tuple[Repository, ...]
    last_fetch: float

    def to_record(self) -> dict:
        return {
            "username": self.username,
            "repos": [repo.to_dict() for repo in self.repos],
            "userInfo": self.user_info.to_dict(),
            "lastFetch": int(self.last_fetch * 1000),
        }

    @classmethod
    def from_record(cls, record: dict) -> "UserData":
        if not isinstance(record, dict):
            raise ValueError("cache record must be a mapping")
        try:
            username = record["username"]
            repos = record["repos"]
            user_info = record["userInfo"]
            last_fetch = float(record["lastFetch"]) / 1000.0
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed cache record: {exc}") from exc
        if not isinstance(username, str) or not isinstance(repos, list) or not repos:
            raise ValueError("malformed cache record")
        if not math.isfinite(last_fetch):
            raise ValueError("cache record has no usable lastFetch")
        try:
            return cls(
                username=username,
                user_info=UserIdentity.from_api(user_info),
                repos=tuple(Repository.from_api(repo) for repo in repos),
                last_fetch=last_fetch,
            )
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed cache record: {exc}") from exc


@dataclass
class RateLimitState:
    remaining: int
    reset_at: Optional[float] = None


@dataclass
class Settings:
    primary_color: str = DEFAULT_PRIMARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    bio: str = ""
    linkedin: str = ""
    twitter: str = ""
    email: str = ""
    # Accepted and persisted, but filtering ignores it.
    filter_starred: bool = False
    filter_no_forks: bool = DEFAULT_FILTER_NO_FORKS
    sort_by: SortKey = SortKey(DEFAULT_SORT_BY)
    featured_repos: List[str] = field(default_factory=list)

    # This function does build settings from a saved camelCase record.
    # Each invalid or missing field keeps its default.
    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        settings = cls()
        if not isinstance(data, dict):
            return settings

        for key, attr in _TEXT_FIELDS.items():
            value = data.get(key)
            if isinstance(value, str) and (value or attr not in _COLOR_FIELDS):
                setattr(settings, attr, value)

        for key, attr in _FLAG_FIELDS.items():
            value = data.get(key)
            if isinstance(value, bool):
                setattr(settings, attr, value)

        try:
            settings.sort_by = SortKey(data.get("sortBy", settings.sort_by))
        except ValueError:
            pass

        featured = data.get("featuredRepos")
        if isinstance(featured, list):
            settings.featured_repos = [str(name) for name in featured if isinstance(name, str)][:FEATURED_LIMIT]
        return settings

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for key, attr in _TEXT_FIELDS.items()}
        data.update({key: getattr(self, attr) for key, attr in _FLAG_FIELDS.items()})
        data["sortBy"] = SortKey(self.sort_by).value
        data["featuredRepos"] = list(self.featured_repos)
        return data

    def updated(self, **changes) -> "Settings":
        return replace(self, **changes)


_TEXT_FIELDS = {
    "primaryColor": "primary_color",
    "accentColor": "accent_color",
    "bio": "bio",
    "linkedin": "linkedin",
    "twitter": "twitter",
    "email": "email",
}
_COLOR_FIELDS = {"primary_color", "accent_color"}
_FLAG_FIELDS = {
    "filterStarred": "filter_starred",
    "filterNoForks": "filter_no_forks",
}
