"""
Grid planning for cell layouts.
"""

# Standard Library
import math

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.config


PageSpec = igp.config.PageSpec
GridSpec = igp.config.GridSpec
CellBox = igp.config.CellBox

CARD_COLUMNS = igp.config.CARD_COLUMNS
CARD_ROWS = igp.config.CARD_ROWS


#============================================
def compute_grid_shape(cell_count: int) -> tuple[int, int]:
	"""
	Compute a near-square grid shape for a cell count.

	Columns come first from the square root ceiling and rows follow,
	so 5 cells give 3 columns by 2 rows.

	Args:
		cell_count: Number of cells, at least 1.

	Returns:
		Tuple of (columns, rows).
	"""
	columns = math.ceil(math.sqrt(cell_count))
	rows = math.ceil(cell_count / columns)
	return (columns, rows)


#============================================
def plan_grid(
	cell_count: int,
	usable_width: float,
	usable_height: float,
	gap: float,
	origin_x: float = 0.0,
	origin_y: float = 0.0,
) -> GridSpec:
	"""
	Plan a grid that fills the usable area.

	Cell sizes are not clamped; a gap too wide for the area yields a
	negative cell size.

	Args:
		cell_count: Number of cells, at least 1.
		usable_width: Usable width in points.
		usable_height: Usable height in points.
		gap: Gap between cells in points.
		origin_x: Left edge of the grid.
		origin_y: Top edge of the grid.

	Returns:
		GridSpec.
	"""
	columns, rows = compute_grid_shape(cell_count)
	cell_width = (usable_width - (columns - 1) * gap) / columns
	cell_height = (usable_height - (rows - 1) * gap) / rows
	return GridSpec(
		columns=columns,
		rows=rows,
		cell_width=cell_width,
		cell_height=cell_height,
		gap=gap,
		origin_x=origin_x,
		origin_y=origin_y,
	)


#============================================
def plan_page_grid(cell_count: int, page: PageSpec, gap: float) -> GridSpec:
	"""
	Plan a grid inside the page margins.

	Args:
		cell_count: Number of cells, at least 1.
		page: Page spec.
		gap: Gap between cells in points.

	Returns:
		GridSpec anchored at the top-left margin corner.
	"""
	return plan_grid(
		cell_count,
		page.usable_width,
		page.usable_height,
		gap,
		origin_x=page.margin_left,
		origin_y=page.margin_top,
	)


#============================================
def plan_fixed_grid(
	columns: int,
	rows: int,
	cell_width: float,
	cell_height: float,
	gap: float,
	page_width: float,
	page_height: float,
) -> GridSpec:
	"""
	Center a grid of fixed-size cells on the page.

	Margins play no part; the origin comes from the grid footprint.

	Args:
		columns: Column count.
		rows: Row count.
		cell_width: Cell width in points.
		cell_height: Cell height in points.
		gap: Gap between cells in points.
		page_width: Page width in points.
		page_height: Page height in points.

	Returns:
		GridSpec.
	"""
	grid_width = columns * cell_width + (columns - 1) * gap
	grid_height = rows * cell_height + (rows - 1) * gap
	return GridSpec(
		columns=columns,
		rows=rows,
		cell_width=cell_width,
		cell_height=cell_height,
		gap=gap,
		origin_x=(page_width - grid_width) / 2.0,
		origin_y=(page_height - grid_height) / 2.0,
	)


#============================================
def plan_card_grid(page: PageSpec) -> GridSpec:
	"""
	Plan the business card grid: 2 x 5 landscape cards of 3.5 x 2.0 in.

	Args:
		page: Page spec.

	Returns:
		GridSpec centered on the page.
	"""
	return plan_fixed_grid(
		CARD_COLUMNS,
		CARD_ROWS,
		igp.config.inches_to_points(igp.config.CARD_WIDTH_INCHES),
		igp.config.inches_to_points(igp.config.CARD_HEIGHT_INCHES),
		igp.config.inches_to_points(igp.config.CARD_GAP_INCHES),
		page.width,
		page.height,
	)


#============================================
def cell_box(grid: GridSpec, index: int) -> CellBox:
	"""
	Compute the box for a cell index in row-major order.

	Args:
		grid: Grid spec.
		index: Zero-based cell index.

	Returns:
		CellBox with a top-left page coordinate.
	"""
	row = index // grid.columns
	col = index % grid.columns
	return CellBox(
		x=grid.origin_x + col * (grid.cell_width + grid.gap),
		y=grid.origin_y + row * (grid.cell_height + grid.gap),
		width=grid.cell_width,
		height=grid.cell_height,
	)


def iter_cell_boxes(grid: GridSpec, cell_count: int):
	"""
	Yield the boxes for cells 0 through cell_count - 1.
	"""
	for index in range(cell_count):
		yield cell_box(grid, index)
