#------------------------------------------------------------
#                   description_service.py
#         Pulls a short plain-text excerpt out of a
#                      README's markdown.

import re
from ..config import README_EXCERPT_LIMIT, README_SCAN_LIMIT

README_SKIP_PREFIXES = ("#", "![", "[!", "[![")
MARKDOWN_LINK_PATTERN = r"\[([^\]]+)\]\([^)]+\)"
MARKDOWN_BOLD_PATTERN = r"\*\*([^*]+)\*\*"
MARKDOWN_ITALIC_PATTERN = r"\*([^*]+)\*"
MARKDOWN_CODE_PATTERN = r"`([^`]+)`"
TRUNCATION_SUFFIX = "..."


# This function does find the first prose paragraph of a README.
# Headings and badge/image lines before it are skipped.
def collect_first_paragraph(markdown: str) -> str:
    paragraph = ""
    found_content = False

    for line in (markdown or "").split("\n"):
        stripped = line.strip()
        if not stripped:
            if found_content and paragraph:
                break
            continue
        if stripped.startswith(README_SKIP_PREFIXES):
            continue

        found_content = True
        paragraph = f"{paragraph} {stripped}" if paragraph else stripped
        if len(paragraph) > README_SCAN_LIMIT:
            break

    return paragraph


# This function does remove inline markdown formatting.
# Links keep their text; bold, italic and code lose their markers.
def strip_inline_markdown(text: str) -> str:
    text = re.sub(MARKDOWN_LINK_PATTERN, r"\1", text)
    text = re.sub(MARKDOWN_BOLD_PATTERN, r"\1", text)
    text = re.sub(MARKDOWN_ITALIC_PATTERN, r"\1", text)
    return re.sub(MARKDOWN_CODE_PATTERN, r"\1", text)


def extract_first_paragraph(markdown: str) -> str:
    """Return a short plain-text excerpt of a README.

    Scan, then strip, then truncate: the paragraph is collected from the raw
    markdown, inline formatting is removed, and the result is cut to
    ``README_EXCERPT_LIMIT`` characters with a trailing ``...`` when longer.
    """
    paragraph = strip_inline_markdown(collect_first_paragraph(markdown))
    if len(paragraph) > README_EXCERPT_LIMIT:
        return paragraph[:README_EXCERPT_LIMIT] + TRUNCATION_SUFFIX
    return paragraph
