"""Object names for uploaded images."""

import re

_SEPARATORS = re.compile(r"[\s_]+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHENS = re.compile(r"-{2,}")
_FALLBACK_HINT = "image"


def slugify(value: str) -> str:
    """Lowercase, hyphenate whitespace/underscores and drop other characters."""
    slug = _SEPARATORS.sub("-", value.strip().lower())
    slug = _DISALLOWED.sub("", slug)
    return _REPEATED_HYPHENS.sub("-", slug).strip("-")


def file_extension(filename: str, default: str = "png") -> str:
    """Extension of `filename` without the dot, or `default` when it has none."""
    _, dot, ext = filename.rpartition(".")
    ext = re.sub(r"[^a-z0-9]", "", ext.lower()) if dot else ""
    return ext or default


def object_name(
    name_hint: str,
    placeholder_id: str,
    filename: str,
    default_extension: str = "png",
) -> str:
    """`{hint}-{placeholder_id}.{ext}`; identical for identical inputs."""
    hint = slugify(name_hint) or _FALLBACK_HINT
    ext = file_extension(filename, default_extension)
    return f"{hint}-{placeholder_id}.{ext}"


def single_image_name(
    prefix: str,
    name_hint: str,
    upload_id: str,
    filename: str,
    default_extension: str = "png",
) -> str:
    """`{prefix}-{hint}-{upload_id}.{ext}` for an entity's cover or badge image.

    `upload_id` keeps the images of same-named records apart.
    """
    hint = slugify(name_hint) or _FALLBACK_HINT
    ext = file_extension(filename, default_extension)
    return f"{prefix}-{hint}-{upload_id}.{ext}"
