"""
Source loading: raster decode or single-page PDF rasterization.
"""

# Standard Library
import contextlib
import dataclasses
import pathlib

# PIP3 modules
import fitz
import PIL.Image
import reportlab.lib.utils

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.config
import image_grid_pdf.errors


InputError = igp.errors.InputError
ResourceError = igp.errors.ResourceError

DEFAULT_DOCUMENT_DPI = igp.config.DEFAULT_DOCUMENT_DPI
POINTS_PER_INCH = igp.config.POINTS_PER_INCH

RASTER = "raster"
RASTERIZED = "rasterized"


@dataclasses.dataclass
class SourceImage:
	path: pathlib.Path
	kind: str
	width: int
	height: int
	image: PIL.Image.Image
	reader: reportlab.lib.utils.ImageReader


#============================================
def is_document_path(path: pathlib.Path) -> bool:
	"""
	Check whether a path names a PDF document.

	Args:
		path: Input path.

	Returns:
		True for a .pdf suffix in any case.
	"""
	return path.suffix.lower() == ".pdf"


#============================================
def load_raster(path: pathlib.Path) -> PIL.Image.Image:
	"""
	Decode a raster image file to RGB.

	Args:
		path: Image path.

	Returns:
		Loaded RGB image.
	"""
	if not path.is_file():
		raise InputError(f"Input file not found: {path}")
	try:
		with PIL.Image.open(path) as opened:
			opened.load()
			image = opened.convert("RGB")
	except MemoryError as error:
		raise ResourceError(f"Not enough memory to decode {path}") from error
	except (OSError, ValueError, PIL.Image.DecompressionBombError) as error:
		raise InputError(f"Failed to load image {path}: {error}") from error
	return image


#============================================
def load_document(path: pathlib.Path, dpi: int = DEFAULT_DOCUMENT_DPI) -> PIL.Image.Image:
	"""
	Rasterize the only page of a PDF document.

	Args:
		path: PDF path.
		dpi: Render resolution.

	Returns:
		Rendered RGB image.
	"""
	if not path.is_file():
		raise InputError(f"Input file not found: {path}")
	try:
		document = fitz.open(path)
	except (RuntimeError, ValueError, fitz.mupdf.FzErrorBase) as error:
		raise InputError(f"Failed to open document {path}: {error}") from error
	try:
		if document.page_count != 1:
			raise InputError(
				f"Document {path} has {document.page_count} pages; exactly one is supported"
			)
		page = document[0]
		scale = dpi / POINTS_PER_INCH
		matrix = fitz.Matrix(scale, scale)
		try:
			pixmap = page.get_pixmap(matrix=matrix, alpha=False)
			image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
		except (MemoryError, RuntimeError, fitz.mupdf.FzErrorBase) as error:
			raise ResourceError(f"Cannot rasterize {path} at {dpi} dpi: {error}") from error
	finally:
		document.close()
	return image


#============================================
@contextlib.contextmanager
def open_source(path: pathlib.Path, dpi: int = DEFAULT_DOCUMENT_DPI):
	"""
	Load a source image and keep it alive for the enclosed block.

	Args:
		path: Image or PDF path.
		dpi: Render resolution for PDF input.

	Yields:
		SourceImage.
	"""
	path = pathlib.Path(path)
	if is_document_path(path):
		image = load_document(path, dpi)
		kind = RASTERIZED
	else:
		image = load_raster(path)
		kind = RASTER
	try:
		width, height = image.size
		if width <= 0 or height <= 0:
			raise InputError(f"Source {path} has no pixels")
		source = SourceImage(
			path=path,
			kind=kind,
			width=width,
			height=height,
			image=image,
			reader=reportlab.lib.utils.ImageReader(image),
		)
		yield source
	finally:
		image.close()
