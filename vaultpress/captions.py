"""Caption lookup in embedded image metadata."""

from io import BytesIO

from PIL import Image, IptcImagePlugin
from PIL.ExifTags import IFD, Base

from vaultpress.logger import get_logger

logger = get_logger(__name__)

# IPTC record 2 (application), dataset 120: Caption/Abstract
IPTC_CAPTION_ABSTRACT = (2, 120)


def extract_caption(data: bytes) -> str | None:
    """
    Pick a caption out of an image's embedded metadata.

    Sources are tried in order: IPTC Caption/Abstract, EXIF ImageDescription,
    EXIF UserComment. The first non-blank one wins. Images that can't be read
    log a warning and have no caption.

    """
    try:
        with Image.open(BytesIO(data)) as image:
            iptc = IptcImagePlugin.getiptcinfo(image) or {}
            exif = image.getexif()
            candidates = [
                iptc.get(IPTC_CAPTION_ABSTRACT),
                exif.get(Base.ImageDescription),
                _decode_user_comment(exif.get_ifd(IFD.Exif).get(Base.UserComment)),
            ]
    except Exception as e:
        logger.warning(f"Could not read image metadata for caption: {e}")
        return None

    for candidate in candidates:
        caption = _to_text(candidate)
        if caption:
            return caption
    return None


def _to_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        # Repeatable IPTC datasets come back as a list of values
        value = b" ".join(item for item in value if isinstance(item, bytes))
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value).strip().strip("\x00").strip()
    return text or None


def _decode_user_comment(value: object) -> str | None:
    """Decode an EXIF UserComment, whose first 8 bytes name its character code."""
    if not isinstance(value, bytes):
        return value if isinstance(value, str) else None

    code, payload = value[:8], value[8:]
    if code.startswith(b"ASCII"):
        return payload.decode("ascii", errors="replace")
    if code.startswith(b"UNICODE"):
        encoding = "utf-16-be" if payload[:1] == b"\x00" else "utf-16-le"
        return payload.decode(encoding, errors="replace")
    if code.startswith(b"JIS"):
        return payload.decode("shift_jis", errors="replace")
    return payload.decode("utf-8", errors="replace")
