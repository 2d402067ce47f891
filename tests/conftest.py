"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import PIL.Image
import pytest
import reportlab.pdfgen.canvas

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def write_image(path: pathlib.Path, width: int, height: int, mode: str = "RGB") -> pathlib.Path:
	"""
	Write a solid test image.

	Args:
		path: Output path; the suffix picks the format.
		width: Pixel width.
		height: Pixel height.
		mode: Pillow image mode.

	Returns:
		The written path.
	"""
	color = (200, 40, 40, 255)[: len(mode)]
	image = PIL.Image.new(mode, (width, height), color)
	image.save(path)
	return path


#============================================
def write_pdf(path: pathlib.Path, page_count: int, page_size: tuple[float, float] = (72.0, 36.0)) -> pathlib.Path:
	"""
	Write a test PDF with a filled box on every page.

	Args:
		path: Output path.
		page_count: Number of pages.
		page_size: Page size in points.

	Returns:
		The written path.
	"""
	pdf = reportlab.pdfgen.canvas.Canvas(str(path), pagesize=page_size)
	for index in range(page_count):
		pdf.setFillColorRGB(0.1, 0.3, 0.8)
		pdf.rect(4, 4, page_size[0] - 8, page_size[1] - 8, stroke=0, fill=1)
		if index < page_count - 1:
			pdf.showPage()
	pdf.save()
	return path


@pytest.fixture
def photo_path(tmp_path: pathlib.Path) -> pathlib.Path:
	return write_image(tmp_path / "photo.jpg", 400, 300)


@pytest.fixture
def card_path(tmp_path: pathlib.Path) -> pathlib.Path:
	return write_image(tmp_path / "card.png", 350, 200)


@pytest.fixture
def portrait_path(tmp_path: pathlib.Path) -> pathlib.Path:
	return write_image(tmp_path / "portrait.png", 200, 350)


@pytest.fixture
def one_page_pdf(tmp_path: pathlib.Path) -> pathlib.Path:
	return write_pdf(tmp_path / "sheet.pdf", 1)


@pytest.fixture
def two_page_pdf(tmp_path: pathlib.Path) -> pathlib.Path:
	return write_pdf(tmp_path / "booklet.pdf", 2)
