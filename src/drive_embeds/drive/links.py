"""Google Drive link extraction from message text."""

import re

from drive_embeds.models.drive import FileReference

# The file ID is the path segment after d (files), e (published forms), or folders.
# The optional tail keeps /view, /edit?usp=sharing and similar, but never ends on
# punctuation or a closing quote/paren so "see <link>." captures the link only.
# Any Unicode whitespace (NBSP, U+3000, ...) ends a link; the ID itself is ASCII only.
DRIVE_URL_PATTERN = re.compile(
    r"https?://(?:drive|docs)\.google\.com/[^\s'\")]+/(?:d|e|folders)/([-A-Za-z0-9_]{25,})"
    r"(?:/[^\s'\")]*[^\s\")'.?!])?"
)


def extract_file_references(text: str) -> list[FileReference]:
    """Extract Drive links from message text in order of appearance.

    Duplicates are kept; every occurrence gets its own preview.
    """
    return [
        FileReference(url=match.group(0), file_id=match.group(1))
        for match in DRIVE_URL_PATTERN.finditer(text)
    ]
