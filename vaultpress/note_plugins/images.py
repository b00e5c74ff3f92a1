"""Image reference rewriters that turn every image syntax into a figure shortcode."""

import re
from typing import TYPE_CHECKING

from vaultpress.context import ExportContext
from vaultpress.figures import SHORTCODE_OPEN, FigureSpecBuilder, serialize_figure
from vaultpress.logger import get_logger
from vaultpress.models import AltText, Dimensions
from vaultpress.note_plugins.base import NotePlugin
from vaultpress.note_plugins.config import (
    ExternalImagesPluginConfig,
    HtmlImagesPluginConfig,
    InternalEmbedsPluginConfig,
    PluginName,
)
from vaultpress.parsers import (
    EXTERNAL_IMAGE_PATTERN,
    HTML_IMAGE_PATTERN,
    INTERNAL_EMBED_PATTERN,
    parse_html_attributes,
    parse_pipe_modifier,
    split_alt_dimensions,
)

if TYPE_CHECKING:
    from vaultpress.config import ExportConfig

logger = get_logger(__name__)

NUMERIC_PATTERN = re.compile(r"^\d+$")


class InternalEmbedsPlugin(NotePlugin[InternalEmbedsPluginConfig]):
    """Rewrites `![[name]]` and `![[name|modifier]]` embeds of copied attachments.

    Embeds whose attachment wasn't found stay exactly as written.
    """

    name = PluginName.INTERNAL_EMBEDS

    def __init__(
        self, config: InternalEmbedsPluginConfig, global_config: "ExportConfig"
    ) -> None:
        super().__init__(config)
        self.figures = FigureSpecBuilder(global_config)

    async def process(self, ctx: ExportContext) -> ExportContext:
        def replace_embed(match: re.Match) -> str:
            name, pipe_text = match.group(1), match.group(2)

            attachment = ctx.attachments.get(name)
            if attachment is None:
                logger.debug(f"Leaving unresolved embed as-is: {match.group(0)}")
                return match.group(0)

            modifier = parse_pipe_modifier(pipe_text)
            spec = self.figures.for_attachment(
                attachment,
                alt=modifier.text if isinstance(modifier, AltText) else None,
                dimensions=modifier if isinstance(modifier, Dimensions) else None,
            )
            return serialize_figure(spec)

        ctx.content = INTERNAL_EMBED_PATTERN.sub(replace_embed, ctx.content)
        return ctx


class ExternalImagesPlugin(NotePlugin[ExternalImagesPluginConfig]):
    """Rewrites markdown images, `![alt](url)` and `![alt|500x300](url)`."""

    name = PluginName.EXTERNAL_IMAGES

    def __init__(
        self, config: ExternalImagesPluginConfig, global_config: "ExportConfig"
    ) -> None:
        super().__init__(config)
        self.figures = FigureSpecBuilder(global_config)

    async def process(self, ctx: ExportContext) -> ExportContext:
        def replace_image(match: re.Match) -> str:
            alt_text, url = match.group(1), match.group(2)

            # Already a shortcode, or an in-page anchor
            if url.startswith((SHORTCODE_OPEN, "#")):
                return match.group(0)

            alt, dimensions = split_alt_dimensions(alt_text)
            spec = self.figures.for_url(url, alt=alt or None, dimensions=dimensions)
            return serialize_figure(spec)

        ctx.content = EXTERNAL_IMAGE_PATTERN.sub(replace_image, ctx.content)
        return ctx


class HtmlImagesPlugin(NotePlugin[HtmlImagesPluginConfig]):
    """Rewrites raw `<img>` tags. Tags without a `src` are left untouched."""

    name = PluginName.HTML_IMAGES

    def __init__(
        self, config: HtmlImagesPluginConfig, global_config: "ExportConfig"
    ) -> None:
        super().__init__(config)
        self.figures = FigureSpecBuilder(global_config)

    async def process(self, ctx: ExportContext) -> ExportContext:
        def replace_tag(match: re.Match) -> str:
            attributes = parse_html_attributes(match.group(0))

            src = attributes.get("src")
            if not src:
                return match.group(0)

            width = attributes.get("width", "")
            height = attributes.get("height", "")
            dimensions = None
            if NUMERIC_PATTERN.match(width):
                dimensions = Dimensions(
                    width=int(width),
                    height=int(height) if NUMERIC_PATTERN.match(height) else None,
                )

            spec = self.figures.for_url(
                src,
                alt=attributes.get("alt") or None,
                caption=attributes.get("title") or None,
                dimensions=dimensions,
            )

            # A numeric height without a usable width still passes through
            cdn_enabled = self.figures.config.cdn_enabled
            if dimensions is None and NUMERIC_PATTERN.match(height) and not cdn_enabled:
                spec = spec.model_copy(update={"height": int(height)})

            return serialize_figure(spec)

        ctx.content = HTML_IMAGE_PATTERN.sub(replace_tag, ctx.content)
        return ctx
