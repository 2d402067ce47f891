"""
PDF output sink built on a ReportLab canvas.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.config
import image_grid_pdf.errors


CellBox = igp.config.CellBox
OutputError = igp.errors.OutputError

GUIDE_DASH = igp.config.GUIDE_DASH
GUIDE_LINE_WIDTH = igp.config.GUIDE_LINE_WIDTH
GUIDE_GRAY = igp.config.GUIDE_GRAY

EMPTY = "empty"
DRAWING = "drawing"
FINALIZED = "finalized"


class PdfSink:
	"""
	Paginated PDF writer accepting draw, commit, and finalize commands.

	Pages live in memory until finalize, which writes the file once.
	"""

	def __init__(self, output_path: pathlib.Path, page_width: float, page_height: float) -> None:
		output_path = pathlib.Path(output_path)
		if output_path.is_dir():
			raise OutputError(f"Output path is a directory: {output_path}")
		parent = output_path.parent
		if not parent.is_dir():
			raise OutputError(f"Output directory does not exist: {parent}")
		self.output_path = output_path
		self.page_width = page_width
		self.page_height = page_height
		self.pages_committed = 0
		self.state = EMPTY
		self.image_forms: dict[int, tuple[reportlab.lib.utils.ImageReader, str]] = {}
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			str(output_path),
			pagesize=(page_width, page_height),
		)

	def _require_open(self) -> None:
		if self.state == FINALIZED:
			raise RuntimeError("PDF sink already finalized")

	def _image_form(
		self,
		reader: reportlab.lib.utils.ImageReader,
		width: int,
		height: int,
	) -> str:
		"""
		Register an image once as a form and return the form name.
		"""
		entry = self.image_forms.get(id(reader))
		if entry is not None:
			return entry[1]
		form_name = f"source_image_{len(self.image_forms)}"
		self.pdf.beginForm(form_name, 0, 0, width, height)
		self.pdf.drawImage(
			reader,
			0,
			0,
			width=width,
			height=height,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)
		self.pdf.endForm()
		self.image_forms[id(reader)] = (reader, form_name)
		return form_name

	def draw_image(
		self,
		reader: reportlab.lib.utils.ImageReader,
		matrix: tuple[float, float, float, float, float, float],
		width: int,
		height: int,
	) -> None:
		"""
		Paint an image through an affine matrix.

		Args:
			reader: Image to paint.
			matrix: PDF matrix (a, b, c, d, e, f).
			width: Image width in image space.
			height: Image height in image space.
		"""
		self._require_open()
		form_name = self._image_form(reader, width, height)
		self.state = DRAWING
		self.pdf.saveState()
		self.pdf.transform(*matrix)
		self.pdf.doForm(form_name)
		self.pdf.restoreState()

	def draw_cut_guide(self, cell: CellBox) -> None:
		"""
		Stroke a dotted rectangle around a full cell.

		Args:
			cell: Cell box in top-left page coordinates.
		"""
		self._require_open()
		self.state = DRAWING
		self.pdf.saveState()
		self.pdf.setLineWidth(GUIDE_LINE_WIDTH)
		self.pdf.setStrokeGray(GUIDE_GRAY)
		self.pdf.setDash(GUIDE_DASH[0], GUIDE_DASH[1])
		bottom = self.page_height - cell.y - cell.height
		self.pdf.rect(cell.x, bottom, cell.width, cell.height, stroke=1, fill=0)
		self.pdf.restoreState()

	def commit_page(self) -> None:
		"""
		Close the current page and start a new one.
		"""
		self._require_open()
		self.pdf.showPage()
		self.pages_committed += 1
		self.state = EMPTY

	def finalize(self) -> int:
		"""
		Write the document and close the sink.

		Returns:
			Total page count written.
		"""
		self._require_open()
		try:
			self.pdf.save()
		except OSError as error:
			raise OutputError(f"Failed to write {self.output_path}: {error}") from error
		finally:
			self.state = FINALIZED
		self.pages_committed += 1
		return self.pages_committed
