"""Export pipeline stages for vaultpress."""

from .attachments import AttachmentsPlugin
from .base import NotePlugin
from .frontmatter import FrontmatterPlugin
from .images import ExternalImagesPlugin, HtmlImagesPlugin, InternalEmbedsPlugin
from .manager import PluginManager
from .tags import TagsPlugin

__all__ = [
    "NotePlugin",
    "PluginManager",
    "AttachmentsPlugin",
    "ExternalImagesPlugin",
    "FrontmatterPlugin",
    "HtmlImagesPlugin",
    "InternalEmbedsPlugin",
    "TagsPlugin",
]
