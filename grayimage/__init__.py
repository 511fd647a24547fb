"""Gray-scale TIFF and BMP image reading and writing, transforms, text dumps and a blocks-world search."""

__version__ = "0.1.0"