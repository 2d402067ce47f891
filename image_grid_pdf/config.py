"""
Shared configuration and constants.
"""

import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes


POINTS_PER_INCH = 72.0
PAGE_WIDTH, PAGE_HEIGHT = reportlab.lib.pagesizes.letter

DEFAULT_MARGIN = 10.0
DEFAULT_GAP = 5.0
DEFAULT_OUTPUT = "output.pdf"
DEFAULT_REPEAT_COUNT = 1
DEFAULT_CELL_COUNT = 1
DEFAULT_DOCUMENT_DPI = 300

CARD_WIDTH_INCHES = 3.5
CARD_HEIGHT_INCHES = 2.0
CARD_GAP_INCHES = 0.25
CARD_COLUMNS = 2
CARD_ROWS = 5

GUIDE_DASH = (2.0, 2.0)
GUIDE_LINE_WIDTH = 0.5
GUIDE_GRAY = 0.5
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class PageSpec:
	width: float
	height: float
	margin_top: float
	margin_left: float
	margin_right: float
	margin_bottom: float

	@property
	def usable_width(self) -> float:
		return self.width - self.margin_left - self.margin_right

	@property
	def usable_height(self) -> float:
		return self.height - self.margin_top - self.margin_bottom


@dataclasses.dataclass(frozen=True)
class GridSpec:
	columns: int
	rows: int
	cell_width: float
	cell_height: float
	gap: float
	origin_x: float
	origin_y: float

	@property
	def capacity(self) -> int:
		return self.columns * self.rows


@dataclasses.dataclass(frozen=True)
class CellBox:
	"""
	One grid cell, top-left corner in page coordinates (y grows downward).
	"""
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class CellTransform:
	translate_x: float
	translate_y: float
	scale: float
	rotate90: bool
	draw_width: float
	draw_height: float


@dataclasses.dataclass
class ComposeConfig:
	page: PageSpec
	repeat_count: int
	cell_count: int
	gap: float
	business_card: bool
	allow_rotate: bool
	cut_guides: bool
	verbose: bool


@dataclasses.dataclass
class ComposeResult:
	pages: int
	repeat_count: int
	cells_per_page: int
	images_drawn: int
	rotated: bool
	grid: GridSpec


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def letter_page(margin: float = DEFAULT_MARGIN) -> PageSpec:
	"""
	Build a US-Letter page spec with equal margins.

	Args:
		margin: Margin on every side, in points.

	Returns:
		PageSpec.
	"""
	return PageSpec(
		width=PAGE_WIDTH,
		height=PAGE_HEIGHT,
		margin_top=margin,
		margin_left=margin,
		margin_right=margin,
		margin_bottom=margin,
	)
