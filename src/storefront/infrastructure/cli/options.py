"""Options and helpers shared by the CLI command modules."""

from __future__ import annotations

import mimetypes
from pathlib import Path

import click

from storefront.domain.repository.asset_store import ImageUpload

token_option = click.option(
    "--token",
    envvar="STOREFRONT_ADMIN_TOKEN",
    required=True,
    help="Admin token from 'auth login' (or STOREFRONT_ADMIN_TOKEN).",
)

image_options = [
    click.option(
        "--image",
        "images",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Image file to upload (repeatable).",
    ),
    click.option("--image-url", "image_urls", multiple=True, help="External image URL (repeatable)."),
]


def with_image_options(func):
    for option in reversed(image_options):
        func = option(func)
    return func


def read_uploads(paths: tuple[Path, ...]) -> list[ImageUpload]:
    """Load image files from disk as uploads."""
    uploads: list[ImageUpload] = []
    for path in paths:
        content_type, _ = mimetypes.guess_type(path.name)
        uploads.append(
            ImageUpload(
                filename=path.name,
                content_type=content_type or "application/octet-stream",
                data=path.read_bytes(),
            )
        )
    return uploads
