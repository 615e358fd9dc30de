#------------------------------------------------------------
#                        html_view.py
#      Renders a fetched snapshot into one self-contained
#        portfolio page, in one of three visual styles.

import html
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from dateutil import parser as date_parser
from ..config import FEATURED_LIMIT, TOP_LANGUAGE_LIMIT
from ..errors import NoData
from ..models import Repository, Settings, SortKey, TemplateKind, UserData
from .styles import template_styles

NO_DESCRIPTION_LABEL = "No description"
FALLBACK_LANGUAGE_COLOR = "#8b8b8b"

LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#178600",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Ruby": "#701516",
    "PHP": "#4F5D95",
    "Swift": "#F05138",
    "Kotlin": "#A97BFF",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "SCSS": "#c6538c",
    "Vue": "#41b883",
    "Shell": "#89e051",
    "Dart": "#00B4AB",
}

CREATIVE_GRADIENTS = (
    "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
    "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
    "linear-gradient(135deg, #4facfe 0%, #00f2fe 100%)",
    "linear-gradient(135deg, #43e97b 0%, #38f9d7 100%)",
    "linear-gradient(135deg, #fa709a 0%, #fee140 100%)",
    "linear-gradient(135deg, #a18cd1 0%, #fbc2eb 100%)",
)

GITHUB_ICON_PATH = (
    "M12 0C5.37 0 0 5.37 0 12c0 5.31 3.435 9.795 8.205 11.385.6.105.825-.255.825-.57 0-.285-.015-1.23-.015-2.235"
    "-3.015.555-3.795-.735-4.035-1.41-.135-.345-.72-1.41-1.23-1.695-.42-.225-1.02-.78-.015-.795.945-.015 1.62.87 "
    "1.845 1.23 1.08 1.815 2.805 1.305 3.495.99.105-.78.42-1.305.765-1.605-2.67-.3-5.46-1.335-5.46-5.925 0-1.305"
    ".465-2.385 1.23-3.225-.12-.3-.54-1.53.12-3.18 0 0 1.005-.315 3.3 1.23.96-.27 1.98-.405 3-.405s2.04.135 3 .405"
    "c2.295-1.56 3.3-1.23 3.3-1.23.66 1.65.24 2.88.12 3.18.765.84 1.23 1.905 1.23 3.225 0 4.605-2.805 5.625-5.475 "
    "5.925.435.375.81 1.095.81 2.22 0 1.605-.015 2.895-.015 3.3 0 .315.225.69.825.57A12.02 12.02 0 0024 12c0-6.63"
    "-5.37-12-12-12z"
)
LINKEDIN_ICON_PATH = (
    "M20.447 20.452h-3.554v-5.569c0-1.328-.027-3.037-1.852-3.037-1.853 0-2.136 1.445-2.136 2.939v5.667H9.351V9h3.414"
    "v1.561h.046c.477-.9 1.637-1.85 3.37-1.85 3.601 0 4.267 2.37 4.267 5.455v6.286zM5.337 7.433c-1.144 0-2.063-.926"
    "-2.063-2.065 0-1.138.92-2.063 2.063-2.063 1.14 0 2.064.925 2.064 2.063 0 1.139-.925 2.065-2.064 2.065zm1.782 "
    "13.019H3.555V9h3.564v11.452zM22.225 0H1.771C.792 0 0 .774 0 1.729v20.542C0 23.227.792 24 1.771 24h20.451C23.2 "
    "24 24 23.227 24 22.271V1.729C24 .774 23.2 0 22.222 0h.003z"
)
TWITTER_ICON_PATH = (
    "M23.953 4.57a10 10 0 01-2.825.775 4.958 4.958 0 002.163-2.723c-.951.555-2.005.959-3.127 1.184a4.92 4.92 0 00"
    "-8.384 4.482C7.69 8.095 4.067 6.13 1.64 3.162a4.822 4.822 0 00-.666 2.475c0 1.71.87 3.213 2.188 4.096a4.904 "
    "4.904 0 01-2.228-.616v.06a4.923 4.923 0 003.946 4.827 4.996 4.996 0 01-2.212.085 4.936 4.936 0 004.604 3.417 "
    "9.867 9.867 0 01-6.102 2.105c-.39 0-.779-.023-1.17-.067a13.995 13.995 0 007.557 2.209c9.053 0 13.998-7.496 "
    "13.998-13.985 0-.21 0-.42-.015-.63A9.935 9.935 0 0024 4.59z"
)
EMAIL_ICON_PATH = (
    "M20 4H4c-1.1 0-2 .9-2 2v12c0 1.1.9 2 2 2h16c1.1 0 2-.9 2-2V6c0-1.1-.9-2-2-2zm0 4l-8 5-8-5V6l8 5 8-5v2z"
)

ICON_TEMPLATE = '<svg viewBox="0 0 24 24" width="{size}" height="{size}" fill="currentColor"><path d="{path}"/></svg>'
SOCIAL_LINK_TEMPLATE = (
    '<a href="{href}"{target} class="social-link" aria-label="{label}">{icon}</a>'
)
EXTERNAL_TARGET = ' target="_blank" rel="noopener"'
TWITTER_URL_TEMPLATE = "https://twitter.com/{handle}"

MINIMAL_CARD_TEMPLATE = """<article class="project-card">
    <h3 class="project-title"><a href="{url}" target="_blank" rel="noopener">{name}</a></h3>
    <p class="project-desc">{description}</p>
    {topics}<div class="project-meta">
        <div class="project-langs">{languages}</div>
        <div class="project-stats">{stats}</div>
    </div>
    {demo}
</article>"""
MINIMAL_LANGUAGE_TEMPLATE = '<span class="lang-tag" style="--lang-color: {color}">{name} {percent}%</span>'
MINIMAL_TOPICS_TEMPLATE = '<div class="project-topics">{tags}</div>\n    '
MINIMAL_TOPIC_TEMPLATE = '<span class="topic-tag">{topic}</span>'
MINIMAL_DEMO_TEMPLATE = '<a href="{homepage}" class="demo-link" target="_blank" rel="noopener">Live Demo &rarr;</a>'
MINIMAL_TOPIC_LIMIT = 3

DARK_CARD_TEMPLATE = """<article class="project-card">
    <div class="card-header">
        <span class="folder-icon">&#128193;</span>
        <div class="card-links">
            <a href="{url}" target="_blank" rel="noopener" title="GitHub">{github_icon}</a>{demo}
        </div>
    </div>
    <h3 class="project-title">{name}</h3>
    <p class="project-desc">{description}</p>
    {topics}<div class="project-footer">
        <div class="project-langs">{languages}<span class="lang-name">{primary_language}</span></div>
        <div class="project-stats"><span>&#9733; {stars}</span><span>&#8610; {forks}</span></div>
    </div>
</article>"""
DARK_LANGUAGE_TEMPLATE = '<span class="lang-dot" style="background: {color}" title="{name} {percent}%"></span>'
DARK_TOPICS_TEMPLATE = '<ul class="topic-list">{tags}</ul>\n    '
DARK_TOPIC_TEMPLATE = "<li>{topic}</li>"
DARK_DEMO_TEMPLATE = '\n            <a href="{homepage}" target="_blank" rel="noopener" title="Live Demo">&#8599;</a>'
DARK_TOPIC_LIMIT = 3

CREATIVE_CARD_TEMPLATE = """<article class="project-card" style="--card-gradient: {gradient}">
    <div class="card-accent"></div>
    <div class="card-content">
        <div class="card-top">{topics}</div>
        <h3 class="project-title">{name}</h3>
        <p class="project-desc">{description}</p>
        <span class="card-stats">&#9733; {stars} &middot; &#8610; {forks}</span>
        <div class="card-bottom">
            <div class="lang-pills">{languages}</div>
            <div class="card-actions">
                <a href="{url}" class="card-btn" target="_blank" rel="noopener">View Code</a>{demo}
            </div>
        </div>
    </div>
</article>"""
CREATIVE_LANGUAGE_TEMPLATE = '<span class="lang-pill" title="{percent}%">{name}</span>'
CREATIVE_TOPIC_TEMPLATE = '<span class="topic-tag">{topic}</span>'
CREATIVE_DEMO_TEMPLATE = '\n                <a href="{homepage}" class="card-btn primary" target="_blank" rel="noopener">Demo</a>'
CREATIVE_TOPIC_LIMIT = 2

PROJECT_ROW_TEMPLATE = """<a href="{url}" class="project-row" target="_blank" rel="noopener">
    <span class="row-name">{name}</span>
    <span class="row-desc">{description}</span>
    <span class="row-stats">&#9733; {stars}</span>
</a>"""

ALL_PROJECTS_TEMPLATE = """
        <section class="all-projects">
            <h2 class="section-title">All Projects</h2>
            <div class="projects-list">
{rows}
            </div>
        </section>"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - Portfolio</title>
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=JetBrains+Mono:wght@400;500&display=swap" rel="stylesheet">
    <style>{styles}</style>
</head>
<body class="template-{template}">
    <div class="portfolio-container">
        <header class="hero">
            <img src="{avatar}" alt="{title}" class="avatar" loading="lazy">
            <h1 class="name">{title}</h1>{bio}{location}
            <div class="social-links">
{social_links}
            </div>
        </header>

        <main>
            <section class="projects-section">
                <h2 class="section-title">Featured Projects</h2>
                <div class="projects-grid">
{featured}
                </div>
            </section>{all_projects}
        </main>

        <footer class="footer">
            <p>Built with <a href="https://github.com" target="_blank" rel="noopener">GitHub</a></p>
        </footer>
    </div>
</body>
</html>
"""
BIO_TEMPLATE = '\n            <p class="bio">{bio}</p>'
LOCATION_TEMPLATE = '\n            <p class="location">&#128205; {location}</p>'


def escape(value: Optional[str]) -> str:
    if not value:
        return ""
    return html.escape(str(value), quote=True)


def _indent(block: str, spaces: int) -> str:
    pad = " " * spaces
    return "\n".join(pad + line if line else line for line in block.split("\n"))


# ------------------------------------------------------------
# Repository selection

def _updated_key(repo: Repository) -> float:
    try:
        return date_parser.isoparse(repo.updated_at).timestamp()
    except (TypeError, ValueError, OverflowError):
        return float("-inf")


SORTERS: Dict[SortKey, Callable[[List[Repository]], List[Repository]]] = {
    SortKey.STARS: lambda repos: sorted(repos, key=lambda repo: repo.stars, reverse=True),
    SortKey.UPDATED: lambda repos: sorted(repos, key=_updated_key, reverse=True),
    SortKey.NAME: lambda repos: sorted(repos, key=lambda repo: (repo.name.casefold(), repo.name)),
}


# This function does apply the fork filter and the chosen sort.
# filter_starred is accepted but has no effect.
def filter_repos(repos: Sequence[Repository], settings: Settings) -> List[Repository]:
    selected = list(repos)
    if settings.filter_no_forks:
        selected = [repo for repo in selected if not repo.fork]
    return SORTERS[SortKey(settings.sort_by)](selected)


# This function does pick the repositories shown as featured.
# Named picks keep the user's order; otherwise the top of the list is used.
def featured_repos(filtered: Sequence[Repository], settings: Settings) -> List[Repository]:
    if settings.featured_repos:
        by_name: Dict[str, Repository] = {}
        for repo in filtered:
            by_name.setdefault(repo.name, repo)
        picks = [by_name[name] for name in settings.featured_repos if name in by_name]
        return picks[:FEATURED_LIMIT]
    return list(filtered[:FEATURED_LIMIT])


def remaining_repos(filtered: Sequence[Repository], featured: Sequence[Repository]) -> List[Repository]:
    featured_names = {repo.name for repo in featured}
    return [repo for repo in filtered if repo.name not in featured_names]


# ------------------------------------------------------------
# Per-card helpers

def _js_round(value: float) -> int:
    return int(math.floor(value + 0.5))


def top_languages(repo: Repository, limit: int = TOP_LANGUAGE_LIMIT) -> List[Tuple[str, int]]:
    """Return ``(language, percent)`` pairs for the largest languages.

    Percentages are shares of the repository's total bytes, rounded half up.
    Repositories without language data, or with zero bytes, yield nothing.
    """
    if not repo.language_data:
        return []
    total = sum(repo.language_data.values())
    if total <= 0:
        return []
    ranked = sorted(repo.language_data.items(), key=lambda item: item[1], reverse=True)
    return [(language, _js_round(byte_count / total * 100)) for language, byte_count in ranked[:limit]]


def language_color(language: str) -> str:
    return LANGUAGE_COLORS.get(language, FALLBACK_LANGUAGE_COLOR)


# This function does reproduce the classic 31-multiplier string hash.
# It works on UTF-16 code units and wraps to a signed 32-bit int.
def hash_code(text: str) -> int:
    encoded = text.encode("utf-16-le")
    value = 0
    for index in range(0, len(encoded), 2):
        value = (value * 31 + int.from_bytes(encoded[index:index + 2], "little")) & 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def card_gradient(name: str) -> str:
    return CREATIVE_GRADIENTS[abs(hash_code(name)) % len(CREATIVE_GRADIENTS)]


@dataclass(frozen=True)
class CardFields:
    """Escaped, template-independent values for one repository card."""

    name: str
    url: str
    description: str
    homepage: str
    stars: int
    forks: int
    topics: Tuple[str, ...]
    languages: Tuple[Tuple[str, int, str], ...]
    raw_name: str

    @classmethod
    def from_repo(cls, repo: Repository) -> "CardFields":
        description = repo.description or NO_DESCRIPTION_LABEL
        return cls(
            name=escape(repo.name),
            url=escape(repo.url),
            description=escape(description),
            homepage=escape(repo.homepage),
            stars=repo.stars,
            forks=repo.forks,
            topics=tuple(escape(topic) for topic in repo.topics),
            languages=tuple(
                (escape(language), percent, escape(language_color(language)))
                for language, percent in top_languages(repo)
            ),
            raw_name=repo.name,
        )


# ------------------------------------------------------------
# Card strategies, one per template

def render_minimal_card(card: CardFields) -> str:
    stats = []
    if card.stars > 0:
        stats.append(f'<span class="stat">&#9733; {card.stars}</span>')
    if card.forks > 0:
        stats.append(f'<span class="stat">&#8610; {card.forks}</span>')
    topics = card.topics[:MINIMAL_TOPIC_LIMIT]
    return MINIMAL_CARD_TEMPLATE.format(
        url=card.url,
        name=card.name,
        description=card.description,
        topics=MINIMAL_TOPICS_TEMPLATE.format(
            tags="".join(MINIMAL_TOPIC_TEMPLATE.format(topic=topic) for topic in topics)
        ) if topics else "",
        languages="".join(
            MINIMAL_LANGUAGE_TEMPLATE.format(name=name, percent=percent, color=color)
            for name, percent, color in card.languages
        ),
        stats="".join(stats),
        demo=MINIMAL_DEMO_TEMPLATE.format(homepage=card.homepage) if card.homepage else "",
    )


def render_dark_card(card: CardFields) -> str:
    topics = card.topics[:DARK_TOPIC_LIMIT]
    return DARK_CARD_TEMPLATE.format(
        url=card.url,
        github_icon=ICON_TEMPLATE.format(size=20, path=GITHUB_ICON_PATH),
        demo=DARK_DEMO_TEMPLATE.format(homepage=card.homepage) if card.homepage else "",
        name=card.name,
        description=card.description,
        topics=DARK_TOPICS_TEMPLATE.format(
            tags="".join(DARK_TOPIC_TEMPLATE.format(topic=topic) for topic in topics)
        ) if topics else "",
        languages="".join(
            DARK_LANGUAGE_TEMPLATE.format(name=name, percent=percent, color=color)
            for name, percent, color in card.languages
        ),
        primary_language=card.languages[0][0] if card.languages else "",
        stars=card.stars,
        forks=card.forks,
    )


def render_creative_card(card: CardFields) -> str:
    return CREATIVE_CARD_TEMPLATE.format(
        gradient=card_gradient(card.raw_name),
        topics="".join(CREATIVE_TOPIC_TEMPLATE.format(topic=topic) for topic in card.topics[:CREATIVE_TOPIC_LIMIT]),
        name=card.name,
        description=card.description,
        stars=card.stars,
        forks=card.forks,
        languages="".join(
            CREATIVE_LANGUAGE_TEMPLATE.format(name=name, percent=percent)
            for name, percent, _ in card.languages
        ),
        url=card.url,
        demo=CREATIVE_DEMO_TEMPLATE.format(homepage=card.homepage) if card.homepage else "",
    )


CARD_RENDERERS: Dict[TemplateKind, Callable[[CardFields], str]] = {
    TemplateKind.MINIMAL: render_minimal_card,
    TemplateKind.DARK: render_dark_card,
    TemplateKind.CREATIVE: render_creative_card,
}


def render_card(repo: Repository, template: TemplateKind) -> str:
    return CARD_RENDERERS[TemplateKind(template)](CardFields.from_repo(repo))


def render_project_row(repo: Repository) -> str:
    return PROJECT_ROW_TEMPLATE.format(
        url=escape(repo.url),
        name=escape(repo.name),
        description=escape(repo.description),
        stars=repo.stars,
    )


# ------------------------------------------------------------
# Page layout

def _social_link(href: str, label: str, icon_path: str, external: bool = True) -> str:
    return SOCIAL_LINK_TEMPLATE.format(
        href=escape(href),
        target=EXTERNAL_TARGET if external else "",
        label=label,
        icon=ICON_TEMPLATE.format(size=24, path=icon_path),
    )


def render_social_links(user_data: UserData, settings: Settings) -> str:
    links = []
    if settings.linkedin:
        links.append(_social_link(settings.linkedin, "LinkedIn", LINKEDIN_ICON_PATH))
    if settings.twitter:
        handle = settings.twitter.replace("@", "", 1)
        links.append(_social_link(TWITTER_URL_TEMPLATE.format(handle=handle), "Twitter", TWITTER_ICON_PATH))
    if settings.email:
        links.append(_social_link(f"mailto:{settings.email}", "Email", EMAIL_ICON_PATH, external=False))
    if user_data.user_info.html_url:
        links.append(_social_link(user_data.user_info.html_url, "GitHub", GITHUB_ICON_PATH))
    return "\n".join(links)


def render(user_data: Optional[UserData], settings: Settings, template: TemplateKind = TemplateKind.MINIMAL) -> str:
    """Render the full portfolio document.

    The output depends only on the arguments, so identical inputs give
    byte-identical documents. Raises ``NoData`` when there is no snapshot.
    """
    if user_data is None:
        raise NoData()
    template = TemplateKind(template)
    user = user_data.user_info

    filtered = filter_repos(user_data.repos, settings)
    featured = featured_repos(filtered, settings)
    others = remaining_repos(filtered, featured)

    bio = settings.bio or user.bio
    all_projects = ""
    if others:
        all_projects = ALL_PROJECTS_TEMPLATE.format(
            rows=_indent("\n".join(render_project_row(repo) for repo in others), 16)
        )

    return PAGE_TEMPLATE.format(
        title=escape(user.display_name),
        styles=template_styles(template),
        template=template.value,
        avatar=escape(user.avatar_url),
        bio=BIO_TEMPLATE.format(bio=escape(bio)) if bio else "",
        location=LOCATION_TEMPLATE.format(location=escape(user.location)) if user.location else "",
        social_links=_indent(render_social_links(user_data, settings), 16),
        featured=_indent("\n".join(render_card(repo, template) for repo in featured), 20),
        all_projects=all_projects,
    )
