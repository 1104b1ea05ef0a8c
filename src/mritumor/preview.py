from __future__ import annotations
from io import BytesIO
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

def make_thumbnail(data: bytes, max_size: int = 512) -> Image.Image:
    """Decode image bytes into an RGB thumbnail no larger than max_size on either side."""
    with Image.open(BytesIO(data)) as src:
        img = src.convert("RGB")
    img.thumbnail((max_size, max_size))
    return img

class PreviewHandle:
    """Display-only view of a selected file, valid until released.

    The handle owns the decoded thumbnail. Files that do not decode as images
    still get a handle, with ``image`` set to None.
    """

    def __init__(self, name: str, image: Optional[Image.Image]):
        self.name = name
        self._image = image
        self.released = False

    @classmethod
    def acquire(cls, selected_file, max_size: int = 512) -> "PreviewHandle":
        try:
            image = make_thumbnail(selected_file.data, max_size=max_size)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.warning("No preview for %s: %s", selected_file.name, e)
            image = None
        return cls(selected_file.name, image)

    @property
    def image(self) -> Optional[Image.Image]:
        return None if self.released else self._image

    def release(self) -> None:
        if self.released:
            return
        if self._image is not None:
            self._image.close()
            self._image = None
        self.released = True

    def __enter__(self) -> "PreviewHandle":
        return self

    def __exit__(self, *exc) -> None:
        self.release()
