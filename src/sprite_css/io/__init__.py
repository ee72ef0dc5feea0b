"""Resource and image I/O utilities."""

from sprite_css.io.images import encode_image, flatten_on_matte, image_to_rgba, load_image
from sprite_css.io.resources import FileSystemResourceHandler, ResourceHandler

__all__ = [
    "FileSystemResourceHandler",
    "ResourceHandler",
    "encode_image",
    "flatten_on_matte",
    "image_to_rgba",
    "load_image",
]
