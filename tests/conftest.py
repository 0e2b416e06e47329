import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import imgtopdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def make_image(tmp_path: Path):
    """
    Factory that writes a solid-colour image and returns its path.

    Args (of the returned callable):
        name: File name; the extension picks the format
        size: (width, height) in pixels
        mode: PIL mode ("RGB", "RGBA", "L", ...)
        dpi: Embedded density, if any
        exif_orientation: EXIF orientation tag to embed (JPEG only)
    """
    def _create(
        name: str = "sample.png",
        size: tuple[int, int] = (200, 100),
        mode: str = "RGB",
        dpi: float | None = None,
        exif_orientation: int | None = None,
        color=None,
    ) -> Path:
        if color is None:
            color = (30, 120, 200, 128) if mode == "RGBA" else "white"
        img = Image.new(mode, size, color=color)
        save_kwargs = {}
        if dpi is not None:
            save_kwargs["dpi"] = (dpi, dpi)
        if exif_orientation is not None:
            exif = Image.Exif()
            exif[0x0112] = exif_orientation
            save_kwargs["exif"] = exif.tobytes()
        path = tmp_path / name
        img.save(path, **save_kwargs)
        return path
    return _create


@pytest.fixture
def sample_image(make_image):
    """Create a simple test image."""
    return make_image()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory for generated PDFs."""
    path = tmp_path / "out"
    path.mkdir()
    return path
