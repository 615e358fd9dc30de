#------------------------------------------------------------
#                      export_service.py
#      Turns a snapshot into the final downloadable page,
#           plus size estimates and preview handles.

import datetime as dt
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote
from ..config import (
    DEFAULT_OUTPUT_FILENAME_TEMPLATE,
    ROBOTS_FILENAME,
    SITEMAP_FILENAME,
)
from ..errors import NoData
from ..models import Settings, TemplateKind, UserData
from ..views import html_view
from . import seo_service
from .document_service import insert_after_marker, save_document

logger = logging.getLogger(__name__)

STYLE_OPEN_MARKER = "<style>"
COLOR_VARIABLES_TEMPLATE = """
        :root {{
            --primary: {primary};
            --accent: {accent};
        }}"""
QR_CODE_URL_TEMPLATE = "https://api.qrserver.com/v1/create-qr-code/?size={size}x{size}&data={data}"
# Characters encodeURIComponent leaves untouched besides alphanumerics.
URI_COMPONENT_SAFE = "-_.!~*'()"
PREVIEW_URI_TEMPLATE = "preview:{id}"
FALLBACK_OUTPUT_FILENAME = "portfolio.html"
EXPORT_WRITTEN_MESSAGE = "Wrote %s (%s)"

DEPLOY_INSTRUCTIONS = {
    "netlify": {
        "title": "Deploy to Netlify",
        "steps": [
            "Download your portfolio HTML file",
            'Go to <a href="https://app.netlify.com/drop" target="_blank">Netlify Drop</a>',
            "Drag and drop your HTML file onto the page",
            "Your site will be live in seconds!",
            "Optional: Connect a custom domain in Netlify settings",
        ],
    },
    "github": {
        "title": "Deploy to GitHub Pages",
        "steps": [
            "Create a new repository named <code>yourusername.github.io</code>",
            "Upload your portfolio.html file and rename it to <code>index.html</code>",
            "Go to repository Settings &rarr; Pages",
            'Select "Deploy from a branch" and choose main branch',
            "Your site will be live at https://yourusername.github.io",
        ],
    },
    "vercel": {
        "title": "Deploy to Vercel",
        "steps": [
            "Download your portfolio HTML file",
            "Create a folder and put the file inside as <code>index.html</code>",
            'Go to <a href="https://vercel.com/new" target="_blank">Vercel</a> and sign up',
            "Drag and drop your folder or connect via CLI",
            "Your site will be deployed automatically",
        ],
    },
}
DEFAULT_DEPLOY_PLATFORM = "netlify"


# This function does format a byte count for display.
# It uses B below 1 KB, then one decimal of KB or MB.
def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def inject_custom_colors(document: str, settings: Settings) -> str:
    block = COLOR_VARIABLES_TEMPLATE.format(
        primary=html_view.escape(settings.primary_color),
        accent=html_view.escape(settings.accent_color),
    )
    result, _ = insert_after_marker(document, STYLE_OPEN_MARKER, block, what="color variables")
    return result


def qr_code_url(url: str, size: int = 150) -> str:
    return QR_CODE_URL_TEMPLATE.format(size=int(size), data=quote(url, safe=URI_COMPONENT_SAFE))


def deploy_instructions(platform: str) -> dict:
    return DEPLOY_INSTRUCTIONS.get(platform, DEPLOY_INSTRUCTIONS[DEFAULT_DEPLOY_PLATFORM])


@dataclass
class PreviewHandle:
    """An in-memory rendered document that must be released exactly once."""

    uri: str
    content: str
    _pipeline: "ExportPipeline" = field(repr=False)
    released: bool = False

    def release(self) -> None:
        self._pipeline.release_preview(self)

    def __enter__(self) -> "PreviewHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.released:
            self.release()


class ExportPipeline:
    """Render, add metadata, add color variables.

    The snapshot, settings and template are explicit fields owned by the
    caller; nothing here reads process-wide state.
    """

    def __init__(
        self,
        user_data: Optional[UserData] = None,
        settings: Optional[Settings] = None,
        template: TemplateKind = TemplateKind.MINIMAL,
    ):
        self.user_data = user_data
        self.settings = settings or Settings()
        self.template = TemplateKind(template)
        self._previews: Dict[str, PreviewHandle] = {}

    def build(self, template: Optional[TemplateKind] = None) -> str:
        if self.user_data is None:
            raise NoData()
        document = html_view.render(self.user_data, self.settings, template or self.template)
        document = seo_service.inject_into_html(document, self.user_data, self.settings)
        return inject_custom_colors(document, self.settings)

    def estimate_size(self) -> str:
        return format_size(len(self.build().encode("utf-8")))

    def compare_templates(self) -> Dict[TemplateKind, str]:
        return {template: self.build(template) for template in TemplateKind}

    # This function does create a disposable preview of the current page.
    # Each handle must be released once through release_preview.
    def open_preview(self, template: Optional[TemplateKind] = None) -> PreviewHandle:
        handle = PreviewHandle(
            uri=PREVIEW_URI_TEMPLATE.format(id=uuid.uuid4().hex),
            content=self.build(template),
            _pipeline=self,
        )
        self._previews[handle.uri] = handle
        return handle

    def release_preview(self, handle: PreviewHandle) -> None:
        if handle.released or self._previews.pop(handle.uri, None) is not handle:
            raise ValueError(f"preview {handle.uri} is not active")
        handle.released = True
        handle.content = ""

    @property
    def active_previews(self) -> int:
        return len(self._previews)

    def default_filename(self) -> str:
        if self.user_data is None:
            return FALLBACK_OUTPUT_FILENAME
        return DEFAULT_OUTPUT_FILENAME_TEMPLATE.format(username=self.user_data.username)

    def download(self, path: Optional[str] = None, directory: Optional[str] = None) -> str:
        document = self.build()
        target = save_document(path or self.default_filename(), document, directory)
        logger.info(EXPORT_WRITTEN_MESSAGE, target, format_size(len(document.encode("utf-8"))))
        return target

    def write_sitemap(self, path: str = SITEMAP_FILENAME, directory: Optional[str] = None,
                      today: Optional[dt.date] = None) -> str:
        if self.user_data is None:
            raise NoData()
        target = save_document(path, seo_service.generate_sitemap(self.user_data, today), directory)
        logger.info(EXPORT_WRITTEN_MESSAGE, target, SITEMAP_FILENAME)
        return target

    def write_robots(self, path: str = ROBOTS_FILENAME, directory: Optional[str] = None) -> str:
        target = save_document(path, seo_service.generate_robots_txt(), directory)
        logger.info(EXPORT_WRITTEN_MESSAGE, target, ROBOTS_FILENAME)
        return target
