#------------------------------------------------------------
#                       seo_service.py
#       Builds search metadata, structured data, sitemap
#          and robots policy for a portfolio document.

import datetime as dt
import json
from typing import List, Optional
from xml.sax.saxutils import escape as xml_escape
from ..config import (
    KEYWORD_LANGUAGE_LIMIT,
    KEYWORD_REPO_LIMIT,
    META_DESCRIPTION_LIMIT,
    SKILL_LIMIT,
)
from ..models import Settings, UserData
from ..views.html_view import escape
from .document_service import insert_before_marker

HEAD_CLOSE_MARKER = "</head>"
BODY_CLOSE_MARKER = "</body>"
DESCRIPTION_SUFFIX = "..."
DEFAULT_BIO_TEMPLATE = "{name}'s developer portfolio"
PAGE_TITLE_TEMPLATE = "{name} - Developer Portfolio"
JOB_TITLE = "Software Developer"
XML_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}

META_TAGS_TEMPLATE = """<!-- basic meta -->
    <meta name="description" content="{description}">
    <meta name="author" content="{name}">
    <meta name="keywords" content="{keywords}">

    <!-- open graph / facebook -->
    <meta property="og:type" content="website">
    <meta property="og:url" content="{url}">
    <meta property="og:title" content="{title}">
    <meta property="og:description" content="{description}">
    <meta property="og:image" content="{image}">

    <!-- twitter card -->
    <meta name="twitter:card" content="summary_large_image">
    <meta name="twitter:url" content="{url}">
    <meta name="twitter:title" content="{title}">
    <meta name="twitter:description" content="{description}">
    <meta name="twitter:image" content="{image}">

    <!-- extra seo stuff -->
    <meta name="robots" content="index, follow">
    <link rel="canonical" href="{url}">"""

SITEMAP_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
    <url>
        <loc>{loc}</loc>
        <lastmod>{lastmod}</lastmod>
        <changefreq>weekly</changefreq>
        <priority>1.0</priority>
    </url>
</urlset>"""

ROBOTS_TXT = """User-agent: *
Allow: /

# sitemap location (update this with your actual domain)
# Sitemap: https://yourdomain.com/sitemap.xml"""


def _dedupe_keep_order(items) -> List[str]:
    return list(dict.fromkeys(item for item in items if item))


def meta_description(user_data: UserData, settings: Settings) -> str:
    user = user_data.user_info
    text = settings.bio or user.bio or DEFAULT_BIO_TEMPLATE.format(name=user.display_name)
    if len(text) > META_DESCRIPTION_LIMIT:
        return text[:META_DESCRIPTION_LIMIT - len(DESCRIPTION_SUFFIX)] + DESCRIPTION_SUFFIX
    return text


# This function does collect languages for keyword metadata.
# Unenriched repositories contribute their primary language.
def keyword_languages(user_data: UserData) -> List[str]:
    languages = []
    for repo in user_data.repos:
        if repo.language_data is not None:
            languages.extend(repo.language_data.keys())
        elif repo.language:
            languages.append(repo.language)
    return _dedupe_keep_order(languages)[:KEYWORD_LANGUAGE_LIMIT]


# This function does collect languages seen during enrichment.
# Only repositories with language data count as skills.
def skills(user_data: UserData) -> List[str]:
    languages = []
    for repo in user_data.repos:
        if repo.language_data:
            languages.extend(repo.language_data.keys())
    return _dedupe_keep_order(languages)[:SKILL_LIMIT]


def keywords(user_data: UserData) -> List[str]:
    repo_names = [repo.name for repo in user_data.repos[:KEYWORD_REPO_LIMIT]]
    return ["developer", "portfolio"] + keyword_languages(user_data) + repo_names


def generate_meta_tags(user_data: Optional[UserData], settings: Settings) -> str:
    if user_data is None:
        return ""
    user = user_data.user_info
    return META_TAGS_TEMPLATE.format(
        description=escape(meta_description(user_data, settings)),
        name=escape(user.display_name),
        keywords=escape(", ".join(keywords(user_data))),
        url=escape(user.html_url),
        title=escape(PAGE_TITLE_TEMPLATE.format(name=user.display_name)),
        image=escape(user.avatar_url),
    )


def structured_data(user_data: UserData, settings: Settings) -> dict:
    """Build the schema.org ``Person`` document for the portfolio owner."""
    user = user_data.user_info
    same_as = [user.html_url, settings.linkedin or None]
    if settings.twitter:
        same_as.append(f"https://twitter.com/{settings.twitter.replace('@', '', 1)}")

    data = {
        "@context": "https://schema.org",
        "@type": "Person",
        "name": user.display_name,
        "url": user.html_url,
        "image": user.avatar_url,
        "description": settings.bio or user.bio or "",
        "sameAs": [link for link in same_as if link],
        "jobTitle": JOB_TITLE,
        "knowsAbout": skills(user_data),
    }
    if settings.email:
        data["email"] = settings.email
    if user.location:
        data["address"] = {"@type": "PostalAddress", "addressLocality": user.location}
    return data


def generate_structured_data(user_data: Optional[UserData], settings: Settings) -> str:
    if user_data is None:
        return ""
    payload = json.dumps(structured_data(user_data, settings), indent=2, ensure_ascii=False)
    # Keep "</script>" inside string values from closing the tag early.
    payload = payload.replace("</", "<\\/")
    return f'<script type="application/ld+json">\n{payload}\n</script>'


def generate_sitemap(user_data: Optional[UserData], today: Optional[dt.date] = None) -> str:
    if user_data is None:
        return ""
    lastmod = (today or dt.date.today()).isoformat()
    return SITEMAP_TEMPLATE.format(
        loc=xml_escape(user_data.user_info.html_url, XML_QUOTE_ENTITIES),
        lastmod=lastmod,
    )


def generate_robots_txt() -> str:
    return ROBOTS_TXT


# This function does splice metadata into a rendered document.
# Without a closing head the document is returned unchanged.
def inject_into_html(document: str, user_data: Optional[UserData], settings: Settings) -> str:
    meta_tags = generate_meta_tags(user_data, settings)
    result, found = insert_before_marker(document, HEAD_CLOSE_MARKER, meta_tags + "\n", what="metadata")
    if not found:
        return document

    result, _ = insert_before_marker(
        result,
        BODY_CLOSE_MARKER,
        generate_structured_data(user_data, settings) + "\n",
        what="structured data",
    )
    return result
