"""
Page composition: repeat the source across grid cells and pages.
"""

# Standard Library
import json
import pathlib

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.config
import image_grid_pdf.errors
import image_grid_pdf.grid
import image_grid_pdf.sink
import image_grid_pdf.source
import image_grid_pdf.transform


ComposeConfig = igp.config.ComposeConfig
ComposeResult = igp.config.ComposeResult
GridSpec = igp.config.GridSpec
OutputError = igp.errors.OutputError
PdfSink = igp.sink.PdfSink
SourceImage = igp.source.SourceImage

PROGRESS_BAR_WIDTH = igp.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	end = "\n" if current >= total else "\r"
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end=end)


#============================================
def plan_layout(config: ComposeConfig) -> tuple[GridSpec, int]:
	"""
	Pick the grid and cells per page for the configured mode.

	Args:
		config: Compose configuration.

	Returns:
		Tuple of (grid, cells_per_page).
	"""
	if config.business_card:
		grid = igp.grid.plan_card_grid(config.page)
		return (grid, grid.capacity)
	grid = igp.grid.plan_page_grid(config.cell_count, config.page, config.gap)
	return (grid, config.cell_count)


#============================================
def compose_pages(source: SourceImage, sink: PdfSink, config: ComposeConfig) -> ComposeResult:
	"""
	Draw every copy of the source and finalize the sink.

	The outer loop runs over copies (or pages for PDF input), the inner
	loop over cells in row-major order. A page is committed between
	repeats and the last page is left for finalize.

	Args:
		source: Loaded source image.
		sink: Output sink.
		config: Compose configuration.

	Returns:
		ComposeResult.
	"""
	grid, cells_per_page = plan_layout(config)
	allow_rotate = config.allow_rotate or config.business_card
	cut_guides = config.cut_guides or config.business_card
	page_height = config.page.height

	images_drawn = 0
	rotated = False
	for repeat in range(config.repeat_count):
		for cell in igp.grid.iter_cell_boxes(grid, cells_per_page):
			transform = igp.transform.fit_cell(cell, source.width, source.height, allow_rotate)
			matrix = igp.transform.pdf_matrix(transform, source.height, page_height)
			sink.draw_image(source.reader, matrix, source.width, source.height)
			if cut_guides:
				sink.draw_cut_guide(cell)
			images_drawn += 1
			rotated = rotated or transform.rotate90
		if config.verbose:
			print_progress("Composing pages", repeat + 1, config.repeat_count)
		if repeat < config.repeat_count - 1:
			sink.commit_page()

	pages = sink.finalize()
	return ComposeResult(
		pages=pages,
		repeat_count=config.repeat_count,
		cells_per_page=cells_per_page,
		images_drawn=images_drawn,
		rotated=rotated,
		grid=grid,
	)


#============================================
def compose_pdf(
	source: SourceImage,
	output_path: pathlib.Path,
	config: ComposeConfig,
) -> ComposeResult:
	"""
	Compose the source into a PDF file.

	Args:
		source: Loaded source image.
		output_path: Output PDF path.
		config: Compose configuration.

	Returns:
		ComposeResult.
	"""
	sink = PdfSink(output_path, config.page.width, config.page.height)
	return compose_pages(source, sink, config)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	source: SourceImage,
	output_path: pathlib.Path,
	result: ComposeResult,
	config: ComposeConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		source: Source image.
		output_path: Composed PDF path.
		result: Compose result.
		config: Compose configuration.
	"""
	grid = result.grid
	data = {
		"input": str(source.path),
		"input_kind": source.kind,
		"input_size": [source.width, source.height],
		"output": str(output_path),
		"pages": result.pages,
		"cells_per_page": result.cells_per_page,
		"images_drawn": result.images_drawn,
		"rotated": result.rotated,
		"business_card": config.business_card,
		"layout": {
			"page_width": config.page.width,
			"page_height": config.page.height,
			"columns": grid.columns,
			"rows": grid.rows,
			"cell_width": grid.cell_width,
			"cell_height": grid.cell_height,
			"gap": grid.gap,
			"origin_x": grid.origin_x,
			"origin_y": grid.origin_y,
		},
	}
	try:
		with manifest_path.open("w", encoding="utf-8") as handle:
			json.dump(data, handle, indent=2, sort_keys=True)
	except OSError as error:
		raise OutputError(f"Failed to write manifest {manifest_path}: {error}") from error
