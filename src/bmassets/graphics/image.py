import numpy as np
from numpy.typing import NDArray
from PIL import Image

TImage = Image.Image


def convert_to_pil_image(pixels: NDArray[np.uint8]) -> TImage:
    npp = np.ascontiguousarray(pixels, dtype=np.uint8)
    return Image.fromarray(npp)
