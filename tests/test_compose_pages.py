import json
import pathlib
import re

import pypdf
import pytest

import image_grid_pdf.compose
import image_grid_pdf.config
import image_grid_pdf.errors
import image_grid_pdf.sink
import image_grid_pdf.source


#============================================
class RecordingSink:
	"""
	Sink stand-in that records every command.
	"""

	def __init__(self) -> None:
		self.events: list[tuple] = []

	def draw_image(self, reader, matrix, width, height) -> None:
		self.events.append(("draw", matrix, width, height))

	def draw_cut_guide(self, cell) -> None:
		self.events.append(("guide", cell))

	def commit_page(self) -> None:
		self.events.append(("commit",))

	def finalize(self) -> int:
		self.events.append(("finalize",))
		return sum(1 for event in self.events if event[0] in ("commit", "finalize"))

	def kinds(self) -> list[str]:
		return [event[0] for event in self.events]


#============================================
def build_config(
	repeat_count: int,
	cell_count: int,
	business_card: bool = False,
	allow_rotate: bool = False,
	cut_guides: bool = False,
) -> image_grid_pdf.config.ComposeConfig:
	"""
	Build a quiet compose config on a Letter page.
	"""
	return image_grid_pdf.config.ComposeConfig(
		page=image_grid_pdf.config.letter_page(),
		repeat_count=repeat_count,
		cell_count=cell_count,
		gap=image_grid_pdf.config.DEFAULT_GAP,
		business_card=business_card,
		allow_rotate=allow_rotate,
		cut_guides=cut_guides,
		verbose=False,
	)


#============================================
def _count_ops(page: pypdf.PageObject, operator: bytes) -> int:
	"""
	Count a content stream operator on a page.
	"""
	data = page.get_contents().get_data()
	return len(re.findall(rb"(?<![A-Za-z])" + operator + rb"(?![A-Za-z])", data))


#============================================
def test_command_sequence_plain_mode(photo_path: pathlib.Path) -> None:
	"""
	Copies are the outer loop; commits fall only between copies.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(photo_path) as source:
		result = image_grid_pdf.compose.compose_pages(source, sink, build_config(3, 4))
	expected = (["draw"] * 4 + ["commit"]) * 2 + ["draw"] * 4 + ["finalize"]
	assert sink.kinds() == expected
	assert result.pages == 3
	assert result.images_drawn == 12
	assert result.cells_per_page == 4
	assert (result.grid.columns, result.grid.rows) == (2, 2)
	assert result.rotated is False


#============================================
def test_single_copy_has_no_commit(photo_path: pathlib.Path) -> None:
	"""
	One repeat leaves the only page open for finalize.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(photo_path) as source:
		image_grid_pdf.compose.compose_pages(source, sink, build_config(1, 1))
	assert sink.kinds() == ["draw", "finalize"]


#============================================
def test_draws_follow_row_major_cells(photo_path: pathlib.Path) -> None:
	"""
	Draw order walks cells along each row, top row first.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(photo_path) as source:
		image_grid_pdf.compose.compose_pages(source, sink, build_config(1, 4))
	origins = [event[1][4:] for event in sink.events if event[0] == "draw"]
	assert origins[0][0] < origins[1][0]
	assert origins[0][1] == pytest.approx(origins[1][1])
	assert origins[2][0] == pytest.approx(origins[0][0])
	assert origins[2][1] < origins[0][1]


#============================================
def test_card_mode_ignores_cell_count(card_path: pathlib.Path) -> None:
	"""
	Card mode always draws ten guided cells per page.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(card_path) as source:
		result = image_grid_pdf.compose.compose_pages(source, sink, build_config(2, 3, business_card=True))
	page = ["draw", "guide"] * 10
	assert sink.kinds() == page + ["commit"] + page + ["finalize"]
	assert result.cells_per_page == 10
	assert (result.grid.columns, result.grid.rows) == (2, 5)
	guides = [event[1] for event in sink.events if event[0] == "guide"]
	assert all(cell.width == 252.0 and cell.height == 144.0 for cell in guides)


#============================================
def test_card_mode_rotates_portrait(portrait_path: pathlib.Path) -> None:
	"""
	Portrait sources turn to fill landscape cards.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(portrait_path) as source:
		result = image_grid_pdf.compose.compose_pages(source, sink, build_config(1, 1, business_card=True))
	assert result.rotated is True
	matrix = sink.events[0][1]
	assert matrix[0] == 0.0
	assert matrix[3] == 0.0


#============================================
def test_plain_guides_on_request(photo_path: pathlib.Path) -> None:
	"""
	Plain mode draws guides only when asked.
	"""
	sink = RecordingSink()
	with image_grid_pdf.source.open_source(photo_path) as source:
		image_grid_pdf.compose.compose_pages(source, sink, build_config(1, 2, cut_guides=True))
	assert sink.kinds() == ["draw", "guide", "draw", "guide", "finalize"]


#============================================
def test_photo_pdf_pages(photo_path: pathlib.Path, tmp_path: pathlib.Path) -> None:
	"""
	Three copies of a 2x2 grid give three Letter pages without guides.
	"""
	output_path = tmp_path / "out.pdf"
	with image_grid_pdf.source.open_source(photo_path) as source:
		result = image_grid_pdf.compose.compose_pdf(source, output_path, build_config(3, 4))
	assert result.pages == 3
	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 3
	for page in reader.pages:
		assert float(page.mediabox.width) == pytest.approx(612.0)
		assert float(page.mediabox.height) == pytest.approx(792.0)
		assert _count_ops(page, b"Do") == 4
		assert _count_ops(page, b"re") == 0


#============================================
def test_card_pdf_pages(card_path: pathlib.Path, tmp_path: pathlib.Path) -> None:
	"""
	Two card pages hold ten images and ten dashed outlines each, centered
	as a 2x5 grid starting 45 pt from the left edge.
	"""
	output_path = tmp_path / "cards.pdf"
	with image_grid_pdf.source.open_source(card_path) as source:
		image_grid_pdf.compose.compose_pdf(source, output_path, build_config(2, 1, business_card=True))
	reader = pypdf.PdfReader(str(output_path))
	assert len(reader.pages) == 2
	expected_boxes = {
		(45.0 + col * (252.0 + 18.0), 792.0 - 144.0 - row * (144.0 + 18.0), 252.0, 144.0)
		for row in range(5)
		for col in range(2)
	}
	for page in reader.pages:
		assert _count_ops(page, b"Do") == 10
		assert _count_ops(page, b"re") == 10
		data = page.get_contents().get_data()
		assert re.search(rb"\[\s*2\s+2\s*\]\s*0\s+d", data)
		boxes = {
			tuple(float(value) for value in match)
			for match in re.findall(rb"([-\d.]+)\s+([-\d.]+)\s+([-\d.]+)\s+([-\d.]+)\s+re\b", data)
		}
		assert boxes == expected_boxes


#============================================
def test_sink_rejects_missing_directory(tmp_path: pathlib.Path) -> None:
	"""
	The sink fails fast when the output folder is absent.
	"""
	with pytest.raises(image_grid_pdf.errors.OutputError):
		image_grid_pdf.sink.PdfSink(tmp_path / "nope" / "out.pdf", 612.0, 792.0)
	with pytest.raises(image_grid_pdf.errors.OutputError):
		image_grid_pdf.sink.PdfSink(tmp_path, 612.0, 792.0)


#============================================
def test_sink_closed_after_finalize(tmp_path: pathlib.Path) -> None:
	"""
	No command is accepted after finalize.
	"""
	sink = image_grid_pdf.sink.PdfSink(tmp_path / "empty.pdf", 612.0, 792.0)
	assert sink.finalize() == 1
	assert (tmp_path / "empty.pdf").exists()
	with pytest.raises(RuntimeError):
		sink.commit_page()
	with pytest.raises(RuntimeError):
		sink.finalize()


#============================================
def test_write_manifest(photo_path: pathlib.Path, tmp_path: pathlib.Path) -> None:
	"""
	The manifest records the grid and page count.
	"""
	output_path = tmp_path / "out.pdf"
	manifest_path = tmp_path / "out.json"
	config = build_config(2, 5)
	with image_grid_pdf.source.open_source(photo_path) as source:
		result = image_grid_pdf.compose.compose_pdf(source, output_path, config)
		image_grid_pdf.compose.write_manifest(manifest_path, source, output_path, result, config)
	data = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert data["pages"] == 2
	assert data["images_drawn"] == 10
	assert data["input_size"] == [400, 300]
	assert data["layout"]["columns"] == 3
	assert data["layout"]["rows"] == 2


#============================================
def test_sink_registers_each_image_once(photo_path: pathlib.Path, tmp_path: pathlib.Path) -> None:
	"""
	Repeated draws of one image share a single form across pages.
	"""
	output_path = tmp_path / "forms.pdf"
	with image_grid_pdf.source.open_source(photo_path) as source:
		sink = image_grid_pdf.sink.PdfSink(output_path, 612.0, 792.0)
		matrix = (1.0, 0.0, 0.0, 1.0, 10.0, 10.0)
		for _index in range(3):
			sink.draw_image(source.reader, matrix, source.width, source.height)
		sink.commit_page()
		sink.draw_image(source.reader, matrix, source.width, source.height)
		assert sink.finalize() == 2
	assert len(sink.image_forms) == 1
	reader = pypdf.PdfReader(str(output_path))
	assert [_count_ops(page, b"Do") for page in reader.pages] == [3, 1]
