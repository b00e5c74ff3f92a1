"""Small parsers for the pieces of note syntax an export understands."""

import re

from frontmatter.default_handlers import YAMLHandler
from pydantic import ValidationError
from yaml import YAMLError

from vaultpress.context import FrontmatterData
from vaultpress.logger import get_logger
from vaultpress.models import AltText, Dimensions, PipeModifier

logger = get_logger(__name__)

FRONTMATTER_PATTERN = re.compile(r"---\n(.*?)\n---\n", re.DOTALL)
INLINE_TAG_PATTERN = re.compile(r"#([A-Za-z0-9_/-]+)")
DIMENSIONS_PATTERN = re.compile(r"^(\d+)(?:x(\d+))?$")

# ![[name]] or ![[name|modifier]]
INTERNAL_EMBED_PATTERN = re.compile(r"!\[\[([^\]|]+)(?:\|([^\]]*))?\]\]")
# ![alt](url)
EXTERNAL_IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
# <img ...> and <img ... />; quoted values may contain ">"
HTML_IMAGE_PATTERN = re.compile(
    r"""<img\b(?:"[^"]*"|'[^']*'|[^'">])*>""", re.IGNORECASE
)
HTML_ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)

_yaml_handler = YAMLHandler()


def extract_frontmatter(raw: str) -> tuple[FrontmatterData, str]:
    """
    Split a note into its frontmatter and body.

    The header block has to open on the very first line. A header that fails to
    parse is still removed from the body, it just contributes no metadata. Without
    a header the raw text comes back untouched.

    """
    match = FRONTMATTER_PATTERN.match(raw)
    if not match:
        return FrontmatterData(), raw

    body = raw[match.end() :]

    try:
        metadata = _yaml_handler.load(match.group(1))
    except YAMLError as e:
        logger.warning(f"Failed to parse frontmatter as YAML: {e}")
        return FrontmatterData(), body

    if metadata is None:
        return FrontmatterData(), body

    if not isinstance(metadata, dict):
        logger.warning(
            f"Frontmatter must be a mapping, got {type(metadata).__name__}; ignoring it"
        )
        return FrontmatterData(), body

    try:
        return FrontmatterData.model_validate(metadata), body
    except ValidationError as e:
        logger.warning(f"Frontmatter validation error: {e}")
        return FrontmatterData(), body


def collect_tags(frontmatter: FrontmatterData, body: str) -> list[str]:
    """
    Merge frontmatter tags with inline `#tags` from the body, deduplicated and sorted.

    An inline match is skipped only when it starts a line (but not the text) and is
    directly followed by a space.

    """
    tags = {tag for tag in frontmatter.tags if tag}

    for match in INLINE_TAG_PATTERN.finditer(body):
        start, end = match.span()
        heading_like = (
            start != 0 and body[start - 1] == "\n" and body[end : end + 1] == " "
        )
        if not heading_like:
            tags.add(match.group(1))

    return sorted(tags)


def parse_pipe_modifier(text: str | None) -> PipeModifier | None:
    """
    Classify the text after `|` in an embed as a size or as alt text.

    >>> parse_pipe_modifier("500x300")
    Dimensions(width=500, height=300)

    """
    if not text:
        return None

    match = DIMENSIONS_PATTERN.match(text)
    if not match:
        return AltText(text=text)

    width, height = match.groups()
    return Dimensions(width=int(width), height=int(height) if height else None)


def split_alt_dimensions(text: str) -> tuple[str, Dimensions | None]:
    """Split `alt|500x300` into its alt text and size, on the last `|`."""
    if "|" not in text:
        return text, None

    prefix, _, suffix = text.rpartition("|")
    modifier = parse_pipe_modifier(suffix)
    if isinstance(modifier, Dimensions):
        return prefix, modifier
    return text, None


def parse_html_attributes(tag: str) -> dict[str, str]:
    """
    Parse the attributes of a single HTML start tag.

    Values may be double quoted, single quoted or bare; valueless attributes map to
    an empty string. Names are lowercased and the first occurrence of a name wins.

    """
    inner = re.sub(r"^<\s*[A-Za-z][^\s/>]*", "", tag)
    inner = inner.rstrip(">").rstrip().rstrip("/")

    attributes: dict[str, str] = {}
    for match in HTML_ATTRIBUTE_PATTERN.finditer(inner):
        name = match.group(1).lower()
        value = next(
            (group for group in match.groups()[1:] if group is not None), ""
        )
        attributes.setdefault(name, value)
    return attributes
