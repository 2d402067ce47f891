"""
CLI entry points for image to grid PDF conversion.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import image_grid_pdf as igp
import image_grid_pdf.compose
import image_grid_pdf.config
import image_grid_pdf.errors
import image_grid_pdf.source


ComposeConfig = igp.config.ComposeConfig
ImageGridError = igp.errors.ImageGridError
UsageError = igp.errors.UsageError

DEFAULT_OUTPUT = igp.config.DEFAULT_OUTPUT
DEFAULT_REPEAT_COUNT = igp.config.DEFAULT_REPEAT_COUNT
DEFAULT_CELL_COUNT = igp.config.DEFAULT_CELL_COUNT
DEFAULT_DOCUMENT_DPI = igp.config.DEFAULT_DOCUMENT_DPI
DEFAULT_GAP = igp.config.DEFAULT_GAP
DEFAULT_MARGIN = igp.config.DEFAULT_MARGIN
CARD_COLUMNS = igp.config.CARD_COLUMNS
CARD_ROWS = igp.config.CARD_ROWS


class ArgumentParser(argparse.ArgumentParser):
	"""
	Argument parser that raises UsageError instead of exiting.
	"""

	def error(self, message: str) -> None:
		self.print_usage(sys.stderr)
		raise UsageError(message)


#============================================
def parse_cell_count(value: str) -> int:
	"""
	Parse the images_per_page argument.

	Only plain mode reads it; card mode ignores whatever was given.

	Args:
		value: Raw argument text.

	Returns:
		Positive cell count.
	"""
	try:
		cell_count = int(value)
	except ValueError as error:
		raise UsageError(f"images_per_page must be an integer, got {value!r}") from error
	if cell_count < 1:
		raise UsageError(f"images_per_page must be at least 1, got {cell_count}")
	return cell_count


#============================================
def build_config(args: argparse.Namespace) -> ComposeConfig:
	"""
	Build compose config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ComposeConfig.
	"""
	if args.repeat_count < 1:
		raise UsageError(f"copies/pages must be at least 1, got {args.repeat_count}")
	if args.business_card:
		cell_count = CARD_COLUMNS * CARD_ROWS
	else:
		cell_count = parse_cell_count(args.cell_count)
	if args.dpi < 1:
		raise UsageError(f"dpi must be at least 1, got {args.dpi}")
	return ComposeConfig(
		page=igp.config.letter_page(DEFAULT_MARGIN),
		repeat_count=args.repeat_count,
		cell_count=cell_count,
		gap=DEFAULT_GAP,
		business_card=args.business_card,
		allow_rotate=args.rotate,
		cut_guides=args.cut_guides,
		verbose=not args.quiet,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Flags may appear anywhere among the positionals.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = ArgumentParser(description="Tile an image or one-page PDF onto printable Letter pages.")
	parser.add_argument("input_path", help="Image file or single-page PDF.")
	parser.add_argument("output_path", nargs="?", default=DEFAULT_OUTPUT, help="Output PDF path.")
	parser.add_argument(
		"repeat_count",
		nargs="?",
		type=int,
		default=DEFAULT_REPEAT_COUNT,
		help="Copies (image input) or pages (PDF input).",
	)
	parser.add_argument(
		"cell_count",
		nargs="?",
		default=str(DEFAULT_CELL_COUNT),
		help="Images per page, ignored in business card mode.",
	)

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-b", "--business-card", dest="business_card", action="store_true",
		help="Centered 2x5 grid of 3.5x2.0 in cards with cut guides.",
	)
	layout_group.add_argument(
		"-r", "--rotate", dest="rotate", action="store_true",
		help="Turn portrait sources a quarter turn to fill landscape cells.",
	)
	layout_group.add_argument(
		"-g", "--cut-guides", dest="cut_guides", action="store_true",
		help="Draw dotted cut guides around every cell.",
	)
	layout_group.add_argument(
		"--dpi", dest="dpi", type=int, default=DEFAULT_DOCUMENT_DPI,
		help="Rasterization resolution for PDF input.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-q", "--quiet", dest="quiet", action="store_true", help="Suppress status output.")

	parser.set_defaults(
		business_card=False,
		rotate=False,
		cut_guides=False,
		quiet=False,
	)

	args = parser.parse_intermixed_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> igp.config.ComposeResult:
	"""
	Run the full pipeline from source file to PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ComposeResult.
	"""
	config = build_config(args)
	verbose = config.verbose
	input_path = pathlib.Path(args.input_path)
	output_path = pathlib.Path(args.output_path)
	if verbose:
		print("Image to grid PDF pipeline")
		print(f"Input: {input_path}")
		print(f"Output PDF: {output_path}")
		print(f"Business card: {config.business_card}")
		print(f"Repeat count: {config.repeat_count}")
		if not config.business_card:
			print(f"Images per page: {config.cell_count}")

	start_time = time.perf_counter()
	with igp.source.open_source(input_path, args.dpi) as source:
		load_end = time.perf_counter()
		if verbose:
			print(f"Source: {source.kind} {source.width}x{source.height}")
		result = igp.compose.compose_pdf(source, output_path, config)
		compose_end = time.perf_counter()
		if args.manifest_path:
			igp.compose.write_manifest(
				pathlib.Path(args.manifest_path),
				source,
				output_path,
				result,
				config,
			)

	if verbose:
		grid = result.grid
		print(f"Grid: {grid.columns}x{grid.rows} cells of {grid.cell_width:.1f}x{grid.cell_height:.1f} pt")
		print(f"Pages written: {result.pages}")
		print(f"Images drawn: {result.images_drawn}")
		if args.manifest_path:
			print(f"Manifest written: {args.manifest_path}")
		print(
			"Timing: load={:.2f}s compose={:.2f}s".format(
				load_end - start_time,
				compose_end - load_end,
			)
		)
	return result


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Returns:
		Process exit code.
	"""
	try:
		args = parse_args(argv)
		run_pipeline(args)
	except ImageGridError as error:
		print(f"Error: {error}", file=sys.stderr)
		return 1
	return 0
