"""Figure shortcode construction, including the CDN image transform."""

import re
from typing import TYPE_CHECKING

from vaultpress.models import Dimensions, FigureSpec, ResolvedAttachment
from vaultpress.paths import to_url_path

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

SHORTCODE_OPEN = "{{<"
SHORTCODE_CLOSE = ">}}"
SHORTCODE_NAME = "figure"

# Emission order of shortcode attributes
FIGURE_ATTRIBUTES = ("src", "link", "alt", "caption", "width", "height")

ABSOLUTE_URL_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*:|//)")


class FigureSpecBuilder:
    """Builds figure attributes for attachments and image URLs.

    With the CDN transform active, sources point at
    `{site}/cdn-cgi/image/fit=scale-down[,width=W]/path`, the figure links to the
    untransformed image, and the size only lives in the transform URL.
    """

    def __init__(self, config: "ExportConfig") -> None:
        self.config = config

    def for_attachment(
        self,
        attachment: ResolvedAttachment,
        alt: str | None = None,
        dimensions: Dimensions | None = None,
    ) -> FigureSpec:
        image_path = to_url_path(
            self.config.attachments_url_prefix, attachment.new_filename
        )

        if not self.config.cdn_enabled:
            return self._plain(image_path, alt, attachment.caption, dimensions)

        return FigureSpec(
            src=self.cdn_url(image_path, dimensions),
            link=f"{self.config.base_url}{image_path}",
            alt=alt,
            caption=attachment.caption,
        )

    def for_url(
        self,
        url: str,
        alt: str | None = None,
        caption: str | None = None,
        dimensions: Dimensions | None = None,
    ) -> FigureSpec:
        if not self.config.cdn_enabled:
            return self._plain(url, alt, caption, dimensions)

        image_path = url if url.startswith("/") and not url.startswith("//") else f"/{url}"
        link = url if ABSOLUTE_URL_PATTERN.match(url) else f"{self.config.base_url}{image_path}"

        return FigureSpec(
            src=self.cdn_url(image_path, dimensions),
            link=link,
            alt=alt,
            caption=caption,
        )

    def cdn_url(self, image_path: str, dimensions: Dimensions | None = None) -> str:
        options = "fit=scale-down"
        if dimensions is not None:
            options += f",width={dimensions.width}"
        return f"{self.config.base_url}/cdn-cgi/image/{options}{image_path}"

    @staticmethod
    def _plain(
        src: str,
        alt: str | None,
        caption: str | None,
        dimensions: Dimensions | None,
    ) -> FigureSpec:
        return FigureSpec(
            src=src,
            alt=alt,
            caption=caption,
            width=dimensions.width if dimensions else None,
            height=dimensions.height if dimensions else None,
        )


def serialize_figure(spec: FigureSpec) -> str:
    """
    Render a figure shortcode.

    >>> serialize_figure(FigureSpec(src="/images/a.jpg", width=500))
    '{{< figure src="/images/a.jpg" width="500" >}}'

    """
    attributes = []
    for name in FIGURE_ATTRIBUTES:
        value = getattr(spec, name)
        if value is None:
            continue
        value = str(value)
        if name in ("alt", "caption"):
            value = value.replace('"', '\\"')
        attributes.append(f'{name}="{value}"')

    return f"{SHORTCODE_OPEN} {SHORTCODE_NAME} {' '.join(attributes)} {SHORTCODE_CLOSE}"
