#------------------------------------------------------------
#                     document_service.py
#          Provides helpers to splice blocks into a
#           rendered document and to write it out.

import logging
import os
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

MISSING_MARKER_WARNING_TEMPLATE = "marker not found: {marker!r}; {what} not injected"


# This function does insert a block right before the first marker.
# It returns the content and whether the marker was found.
def insert_before_marker(content: str, marker: str, block: str, what: str = "block") -> Tuple[str, bool]:
    index = content.find(marker)
    if index < 0:
        logger.warning(MISSING_MARKER_WARNING_TEMPLATE.format(marker=marker, what=what))
        return content, False
    return content[:index] + block + content[index:], True


# This function does insert a block right after the first marker.
# It returns the content and whether the marker was found.
def insert_after_marker(content: str, marker: str, block: str, what: str = "block") -> Tuple[str, bool]:
    index = content.find(marker)
    if index < 0:
        logger.warning(MISSING_MARKER_WARNING_TEMPLATE.format(marker=marker, what=what))
        return content, False
    position = index + len(marker)
    return content[:position] + block + content[position:], True


# This function does save document text to the given path.
# It creates missing parent directories and writes UTF-8.
def save_document(path: str, content: str, directory: Optional[str] = None) -> str:
    target = os.path.join(directory, path) if directory else path
    parent = os.path.dirname(target)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(target, "w", encoding="utf-8") as file_handle:
        file_handle.write(content)
    return target
