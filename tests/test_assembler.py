from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image
from pypdf import PdfReader

from image_to_pdf import Document, ImageToPdfBuilder, assemble
from image_to_pdf.backends import ImageTransform, PypdfEncoder
from image_to_pdf.codec import decode_image
from image_to_pdf.exceptions import PixelDimensionError
from image_to_pdf.progress import CallbackProgressObserver


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_batch_start(self, total: int) -> None:
        self.events.append(("start", total))

    def on_item_done(self) -> None:
        self.events.append(("item",))

    def on_batch_done(self) -> None:
        self.events.append(("done",))


def _read(document: Document) -> PdfReader:
    return PdfReader(io.BytesIO(document.to_bytes()))


def test_example_scenario_page_sizes(scan_images: list[Image.Image]) -> None:
    document = (
        ImageToPdfBuilder()
        .add_image(scan_images[0])
        .add_image(scan_images[1])
        .add_image(scan_images[2])
        .set_dpi(300)
        .set_title("Example Scans")
        .create()
    )

    assert document.title == "Example Scans"
    assert [page.geometry.as_tuple() for page in document.pages] == [
        (144.0, 192.0),
        (72.0, 96.0),
        (288.0, 384.0),
    ]

    reader = _read(document)
    assert len(reader.pages) == 3
    sizes = [(float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages]
    assert sizes == [(144.0, 192.0), (72.0, 96.0), (288.0, 384.0)]
    assert reader.metadata.title == "Example Scans"


def test_pages_follow_insertion_order(image_factory) -> None:
    images = [image_factory(10 + i, 20 + i) for i in range(5)]

    document = ImageToPdfBuilder(images, dpi=72).create()

    assert len(document) == 5
    for number, (page, image) in enumerate(zip(document, images), start=1):
        assert page.number == number
        assert page.image is image
        assert page.geometry.as_tuple() == (float(image.width), float(image.height))


def test_embedded_images_round_trip(image_factory) -> None:
    red = image_factory(12, 8, color=(255, 0, 0))
    green = image_factory(5, 7, color=(0, 255, 0))

    reader = _read(ImageToPdfBuilder([red, green], dpi=72).create())

    extracted = [page.images[0].image for page in reader.pages]
    assert [image.size for image in extracted] == [(12, 8), (5, 7)]
    assert extracted[0].convert("RGB").getpixel((0, 0)) == (255, 0, 0)
    assert extracted[1].convert("RGB").getpixel((4, 6)) == (0, 255, 0)


def test_image_fills_page_from_origin(image_factory) -> None:
    document = ImageToPdfBuilder([image_factory(600, 800)], dpi=300).create()

    operations = _read(document).pages[0].get_contents().operations
    placements = [[float(value) for value in operands] for operands, op in operations if op == b"cm"]
    drawn = [operands for operands, op in operations if op == b"Do"]
    assert placements == [[144.0, 0.0, 0.0, 192.0, 0.0, 0.0]]
    assert drawn == [["/Im0"]]


@pytest.mark.parametrize("mode", ["L", "RGBA", "LA", "CMYK", "1", "P"])
def test_image_modes_are_embedded(image_factory, mode: str) -> None:
    image = image_factory(9, 4, mode=mode)

    reader = _read(ImageToPdfBuilder([image], dpi=72).create())

    assert reader.pages[0].images[0].image.size == (9, 4)


@pytest.mark.parametrize("mode", ["I;16", "I"])
def test_sixteen_bit_grey_is_scaled_not_clipped(mode: str) -> None:
    image = Image.new(mode, (9, 4), 32768)

    reader = _read(ImageToPdfBuilder([image], dpi=72).create())

    embedded = reader.pages[0].images[0].image.convert("L")
    assert embedded.size == (9, 4)
    assert 126 <= embedded.getpixel((0, 0)) <= 130


def test_sixteen_bit_png_keeps_mid_grey(tmp_path: Path) -> None:
    path = tmp_path / "grey16.png"
    Image.new("I;16", (6, 5), 32768).save(path)
    image = decode_image(path.read_bytes())

    reader = _read(ImageToPdfBuilder([image], dpi=72).create())

    assert 126 <= reader.pages[0].images[0].image.convert("L").getpixel((3, 2)) <= 130


def test_empty_builder_assembles_zero_pages() -> None:
    document = ImageToPdfBuilder().create()

    assert document.page_count == 0
    assert len(_read(document).pages) == 0


def test_repeated_set_dpi_is_idempotent(image_factory) -> None:
    images = [image_factory(300, 150), image_factory(90, 45)]

    once = ImageToPdfBuilder(images).set_dpi(150).create()
    many = ImageToPdfBuilder(images).set_dpi(72).set_dpi(150).set_dpi(150).create()

    assert [p.geometry for p in once] == [p.geometry for p in many]
    assert [p.mediabox for p in _read(once).pages] == [p.mediabox for p in _read(many).pages]


def test_geometry_error_discards_document(image_factory) -> None:
    builder = ImageToPdfBuilder([image_factory(10, 10), Image.new("RGB", (0, 5))])
    observer = RecordingObserver()

    with pytest.raises(PixelDimensionError):
        assemble(builder, observer)

    assert observer.events == [("start", 2), ("item",), ("done",)]
    assert builder.consumed


def test_observer_receives_one_signal_per_page(scan_images) -> None:
    observer = RecordingObserver()

    document = ImageToPdfBuilder(scan_images).create(observer)

    assert observer.events == [("start", 3), ("item",), ("item",), ("item",), ("done",)]
    assert document.page_count == 3


def test_observer_does_not_change_result(image_factory) -> None:
    images = [image_factory(40, 20), image_factory(20, 40)]

    observed = ImageToPdfBuilder(images, dpi=96).create(RecordingObserver())
    plain = ImageToPdfBuilder(images, dpi=96).create()

    assert [p.geometry for p in observed] == [p.geometry for p in plain]
    assert [p.image for p in observed] == [p.image for p in plain]


def test_callback_observer_reports_progress(image_factory) -> None:
    calls: list[tuple[int, int]] = []
    images = [image_factory(3, 3) for _ in range(4)]

    ImageToPdfBuilder(images).create(CallbackProgressObserver(lambda c, t: calls.append((c, t))))

    assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]


def test_custom_encoder_is_driven_in_order(image_factory) -> None:
    created: list[PypdfEncoder] = []

    def factory(title: str) -> PypdfEncoder:
        encoder = PypdfEncoder(title)
        created.append(encoder)
        return encoder

    images = [image_factory(72, 144), image_factory(144, 72)]
    document = assemble(ImageToPdfBuilder(images, dpi=72, title="Custom"), encoder=factory)

    (encoder,) = created
    assert document.encoder is encoder
    assert encoder.title == "Custom"
    assert encoder.page_count == 2
    assert [(encoder.get_page(i).width_pt, encoder.get_page(i).height_pt) for i in range(2)] == [
        (72.0, 144.0),
        (144.0, 72.0),
    ]


def test_dpi_flows_into_image_transform(image_factory) -> None:
    seen: list[ImageTransform] = []

    class SpyEncoder(PypdfEncoder):
        def get_page(self, page_id):
            page = super().get_page(page_id)
            layer = page.get_layer(0)
            original = layer.add_image

            def add_image(image, transform):
                seen.append(transform)
                original(image, transform)

            layer.add_image = add_image
            return page

    assemble(ImageToPdfBuilder([image_factory(10, 10)], dpi=200), encoder=SpyEncoder)

    assert seen == [ImageTransform(dpi=200.0)]


def test_save_to_creates_parent_directories(tmp_path: Path, image_factory) -> None:
    document = ImageToPdfBuilder([image_factory(30, 30)], title="Saved").create()

    destination = document.save_to(tmp_path / "nested" / "out.pdf")

    assert destination.exists()
    reader = PdfReader(str(destination))
    assert len(reader.pages) == 1
    assert reader.metadata.title == "Saved"


def test_create_pdf_writes_stream(image_factory) -> None:
    buffer = io.BytesIO()

    document = ImageToPdfBuilder([image_factory(8, 8)]).create_pdf(buffer)

    assert buffer.getvalue().startswith(b"%PDF")
    assert document.page_count == 1


def test_save_errors_propagate_unchanged(image_factory) -> None:
    class BrokenStream(io.RawIOBase):
        def writable(self) -> bool:
            return True

        def write(self, data) -> int:
            raise OSError("disk full")

    document = ImageToPdfBuilder([image_factory(8, 8)]).create()

    with pytest.raises(OSError, match="disk full"):
        document.save(BrokenStream())
