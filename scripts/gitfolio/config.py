#------------------------------------------------------------
#                          config.py
#   Centralizes API constants, file paths and JSON helpers
#             for cached data and saved settings.

import json
import os

# Environment variable names for configuration
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_CACHE_PATH = "GITFOLIO_CACHE_PATH"
ENV_SETTINGS_PATH = "GITFOLIO_SETTINGS_PATH"
ENV_OUTPUT_DIR = "GITFOLIO_OUTPUT_DIR"

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github.v3+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_REPOS_PER_PAGE = 100
GITHUB_REQUEST_TIMEOUT_SECONDS = 30
ANONYMOUS_RATE_LIMIT = 60

# Pacing between sequential requests, in seconds.
PAGE_DELAY_SECONDS = 0.1
ENRICH_DELAY_SECONDS = 0.05

# How many repositories (by recency) receive language data and readme excerpts.
LANGUAGE_ENRICH_LIMIT = 20
README_ENRICH_LIMIT = 6

# Readme excerpt bounds.
README_SCAN_LIMIT = 300
README_EXCERPT_LIMIT = 250

# Cache lifetime for a fetched snapshot.
CACHE_TTL_SECONDS = 30 * 60

# Rendering and metadata caps.
FEATURED_LIMIT = 6
TOP_LANGUAGE_LIMIT = 3
META_DESCRIPTION_LIMIT = 155
KEYWORD_LANGUAGE_LIMIT = 10
KEYWORD_REPO_LIMIT = 5
SKILL_LIMIT = 15

USERNAME_PATTERN = r"^[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}$"

# Directory paths for cached data, saved settings and exports.
STATE_DIR = os.path.join(os.path.expanduser("~"), ".gitfolio")
DEFAULT_CACHE_PATH = os.path.join(STATE_DIR, "cache.json")
DEFAULT_SETTINGS_PATH = os.path.join(STATE_DIR, "settings.json")
DEFAULT_OUTPUT_FILENAME_TEMPLATE = "{username}-portfolio.html"
SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"

# Settings defaults used when no saved record exists.
DEFAULT_PRIMARY_COLOR = "#6366f1"
DEFAULT_ACCENT_COLOR = "#22d3ee"
DEFAULT_FILTER_NO_FORKS = True
DEFAULT_SORT_BY = "stars"


def resolve_cache_path() -> str:
    return os.environ.get(ENV_CACHE_PATH, "").strip() or DEFAULT_CACHE_PATH


def resolve_settings_path() -> str:
    return os.environ.get(ENV_SETTINGS_PATH, "").strip() or DEFAULT_SETTINGS_PATH


def resolve_output_dir() -> str:
    return os.environ.get(ENV_OUTPUT_DIR, "").strip() or os.getcwd()


def resolve_github_token() -> str:
    return os.environ.get(ENV_GITHUB_TOKEN, "").strip()


# This function does load JSON content from disk safely.
# It returns None when the file is missing or invalid.
def load_json(path: str):
    if not path or not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as file_handle:
            return json.load(file_handle)
    except (OSError, ValueError):
        return None


# This function does write JSON content to disk.
# It creates the parent directory and lets OSError propagate.
def save_json(path: str, data) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as file_handle:
        json.dump(data, file_handle, ensure_ascii=False)


