#!/usr/bin/env python3
"""
Build a single-file portfolio page for a GitHub account.

Fetches the user's public repositories (with language data and readme
excerpts for the most recent ones), renders them in one of three templates,
adds search metadata and writes USERNAME-portfolio.html.

Environment variables:
  GITHUB_TOKEN: Optional token; raises the API quota above the anonymous 60/hour
  GITFOLIO_CACHE_PATH: Where the last snapshot is cached (default: ~/.gitfolio/cache.json)
  GITFOLIO_SETTINGS_PATH: Where settings are saved (default: ~/.gitfolio/settings.json)
  GITFOLIO_OUTPUT_DIR: Directory for generated files (default: current directory)
"""

import sys

from gitfolio.cli import main


if __name__ == "__main__":
    sys.exit(main())
