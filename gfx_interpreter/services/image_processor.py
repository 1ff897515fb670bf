import io

from PIL import Image

# Longest side of generated thumbnails (px)
THUMBNAIL_SIZE = 400

# JPEG quality for thumbnails
THUMBNAIL_QUALITY = 80


class ImageProcessor:
    """Service for inspecting and resizing generated images."""

    def make_thumbnail(self, image_data: bytes, max_size: int = THUMBNAIL_SIZE) -> bytes:
        """
        Scale an image down so its longest side is at most ``max_size``.

        Images already smaller keep their size. Output is always JPEG, so
        transparency is flattened onto black.
        """
        image = Image.open(io.BytesIO(image_data))
        image = image.convert("RGB")
        image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=THUMBNAIL_QUALITY)
        return buffer.getvalue()

    def get_image_dimensions(self, image_data: bytes) -> tuple[int, int]:
        """Get the width and height of an image."""
        image = Image.open(io.BytesIO(image_data))
        return image.size


image_processor = ImageProcessor()
