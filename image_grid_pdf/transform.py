"""
Per-cell fit, centering, and orientation math.
"""

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.config


CellBox = igp.config.CellBox
CellTransform = igp.config.CellTransform


#============================================
def fit_cell(
	cell: CellBox,
	source_width: int,
	source_height: int,
	allow_rotate: bool,
) -> CellTransform:
	"""
	Fit a source into a cell with a uniform scale and center it.

	A portrait source is turned a quarter turn when rotation is allowed.
	Small sources are enlarged to fill the cell.

	Args:
		cell: Target cell.
		source_width: Source width in pixels.
		source_height: Source height in pixels.
		allow_rotate: Allow a 90 degree turn for portrait sources.

	Returns:
		CellTransform.
	"""
	rotate90 = allow_rotate and source_height > source_width
	if rotate90:
		oriented_width = source_height
		oriented_height = source_width
	else:
		oriented_width = source_width
		oriented_height = source_height

	scale = min(cell.width / oriented_width, cell.height / oriented_height)
	draw_width = oriented_width * scale
	draw_height = oriented_height * scale
	offset_x = (cell.width - draw_width) / 2.0
	offset_y = (cell.height - draw_height) / 2.0
	return CellTransform(
		translate_x=cell.x + offset_x,
		translate_y=cell.y + offset_y,
		scale=scale,
		rotate90=rotate90,
		draw_width=draw_width,
		draw_height=draw_height,
	)


#============================================
def pdf_matrix(
	transform: CellTransform,
	source_height: int,
	page_height: float,
) -> tuple[float, float, float, float, float, float]:
	"""
	Express a cell transform as a PDF affine matrix.

	The layout works top-down: translate, scale, and for a rotated cell
	shift by the source height and turn +90 degrees (clockwise on the
	page), then paint the source at its native origin. PDF space grows
	upward and images are drawn from their lower-left corner, so the
	matrix maps an image drawn at (0, 0) with its pixel size straight
	onto the page.

	Args:
		transform: Cell transform.
		source_height: Source height in pixels.
		page_height: Page height in points.

	Returns:
		Tuple of (a, b, c, d, e, f).
	"""
	scale = transform.scale
	page_x = transform.translate_x
	page_top = page_height - transform.translate_y
	if transform.rotate90:
		return (0.0, -scale, scale, 0.0, page_x, page_top)
	return (scale, 0.0, 0.0, scale, page_x, page_top - scale * source_height)
