"""Volumetric scalar dataset assembled from a stack of image layers.

Each layer is an RGB (or grey) image; the scalar value of a voxel is the
mean of its red, green and blue channels. Layers are stacked along ``z`` in
the order they are added, so voxel ``(x, y, z)`` corresponds to pixel
``(x, y)`` of layer ``z``.
"""

import logging

import numpy as np
from PIL import Image

from .geometry.points import ScalarPoint

# Module logger
logger = logging.getLogger(__name__)


def read_layer_image(path):
    """Load an image file as a ``uint8`` RGB array of shape (height, width, 3)."""
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB"), dtype=np.uint8)


class Dataset:
    """Regular grid of scalar values filled layer by layer.

    Parameters
    ----------
    name : str
        Label for the dataset.
    width, height, depth : int
        Grid dimensions; ``depth`` is the number of layers.
    channels : int, default=3
        Channel count of the source layers.
    """

    def __init__(self, name, width, height, depth, channels=3):
        self.name = name
        self.width = int(width)
        self.height = int(height)
        self.depth = int(depth)
        self.channels = int(channels)
        self.values = np.zeros(self.width * self.height * self.depth, dtype=np.float32)

    def __repr__(self):
        return (
            f"{type(self).__name__}({self.name!r}, width={self.width}, "
            f"height={self.height}, depth={self.depth}, channels={self.channels})"
        )

    @classmethod
    def from_images(cls, paths, name=None):
        """Build a dataset with one layer per image file.

        All images must share the size of the first one.

        Raises
        ------
        ValueError
            If *paths* is empty or image sizes differ.
        """
        paths = list(paths)
        if not paths:
            raise ValueError("At least one layer image is required.")
        first = read_layer_image(paths[0])
        height, width = first.shape[:2]
        dataset = cls(name or str(paths[0]), width, height, len(paths), channels=3)
        for z, path in enumerate(paths):
            layer = first if z == 0 else read_layer_image(path)
            dataset.add_layer(layer, z)
        logger.info("Loaded %d layers of %dx%d pixels into %r", len(paths), width, height, dataset.name)
        return dataset

    def get_index(self, x, y, z):
        return x + y * self.width + z * self.width * self.height

    def add_layer(self, layer, layer_index):
        """Store the grey values of one image layer.

        Parameters
        ----------
        layer : numpy.ndarray or PIL.Image.Image
            Pixel data of shape (height, width) or (height, width, channels).
            With three or more channels the value is the mean of the first
            three; otherwise the first channel is used.
        layer_index : int
            Target ``z`` slice.

        Raises
        ------
        ValueError
            If the dataset has been cleared, the layer index is out of range,
            or the layer size does not match the grid.
        """
        if self.values is None:
            raise ValueError("Cannot add layers to a cleared dataset.")
        if not 0 <= layer_index < self.depth:
            raise ValueError(f"Layer index {layer_index} out of range [0, {self.depth}).")
        arr = np.asarray(layer, dtype=np.float32)
        if arr.ndim == 2:
            arr = arr[:, :, None]
        if arr.ndim != 3 or arr.shape[:2] != (self.height, self.width):
            raise ValueError(
                f"Layer has shape {arr.shape}; expected ({self.height}, {self.width}[, channels])."
            )
        grey = arr[:, :, :3].mean(axis=2) if arr.shape[2] >= 3 else arr[:, :, 0]
        start = self.get_index(0, 0, layer_index)
        self.values[start:start + self.width * self.height] = grey.ravel()

    def get_value(self, x, y, z):
        """Return the value at voxel ``(x, y, z)``, or -1 once cleared."""
        if self.values is None:
            return -1
        return float(self.values[self.get_index(x, y, z)])

    def scalar_point(self, x, y, z):
        """Return voxel ``(x, y, z)`` as a :class:`ScalarPoint`."""
        return ScalarPoint.from_coords(x, y, z, self.get_value(x, y, z))

    def as_array(self):
        """Return the values as an array of shape (depth, height, width)."""
        if self.values is None:
            return np.empty((0, 0, 0), dtype=np.float32)
        return self.values.reshape(self.depth, self.height, self.width)

    def clear(self):
        self.name = "Default"
        self.width = -1
        self.height = -1
        self.depth = -1
        self.channels = -1
        self.values = None
