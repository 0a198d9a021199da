import io
import logging

import pytest

import psd_layers
from psd_layers.api.psd_image import PSDDocument
from psd_layers.constants import Compression
from psd_layers.exceptions import (
    UNSUPPORTED_CHANNEL_KIND,
    InvalidGroupStructure,
    TruncatedInput,
    UnsupportedFormat,
)
from psd_layers.psd import PSD

from ..utils import FakeLayer, group_close, group_open, make_psd, pixel_layer

logger = logging.getLogger(__name__)

DATA = b"\x0a\x14\x1e\x28"


def single_layer_psd(**kwargs) -> bytes:
    return make_psd(
        2, 2, [pixel_layer("Layer 1", (0, 0, 2, 2), {0: DATA, 1: DATA, 2: DATA})], **kwargs
    )


def grouped_psd() -> bytes:
    return make_psd(
        2,
        2,
        [
            pixel_layer("Background", (0, 0, 2, 2), {-1: b"\xff" * 4}),
            group_close(),
            pixel_layer("B", (0, 0, 1, 1), {0: b"\x01"}, Compression.RLE),
            group_open("Folder"),
            pixel_layer("Top", (1, 1, 2, 2), {2: b"\x02"}),
        ],
    )


def test_single_layer() -> None:
    psd = PSDDocument.frombytes(single_layer_psd())
    assert psd.size == (2, 2)
    assert psd.channels == 3
    assert len(psd) == 1
    layer = psd[0]
    assert layer.path == ["Layer 1"]
    assert layer.pixels.tolist() == [v * 0x010101 for v in (30, 40, 10, 20)]
    assert layer.numpy()[:, :, 0].tolist() == [[10, 20], [30, 40]]
    assert not layer.numpy()[:, :, 3].any()
    assert psd.warnings == []


def test_layer_order_and_paths() -> None:
    psd = PSDDocument.frombytes(grouped_psd())
    assert [layer.path for layer in psd] == [
        ["Top"],
        ["Folder", "B"],
        ["Background"],
    ]
    assert all(layer.size == psd.size for layer in psd.layers)
    assert int(psd.find("Folder/B").pixels[0]) == 0x01
    assert int(psd.find(["Top"]).pixels[3]) == 0x020000
    assert int(psd.find("Background").pixels.min()) == 0xFF000000


def test_partial_layer_image_is_top_down() -> None:
    psd = PSDDocument.frombytes(
        make_psd(1, 3, [pixel_layer("a", (0, 0, 1, 1), {0: b"\x07"})])
    )
    assert psd[0].bbox == (0, 0, 1, 1)
    assert psd[0].numpy()[:, :, 0].tolist() == [[7], [0], [0]]

    psd = PSDDocument.frombytes(
        make_psd(2, 3, [pixel_layer("b", (1, 0, 3, 2), {0: b"\x01\x02\x03\x04"})])
    )
    assert psd[0].numpy()[:, :, 0].tolist() == [[0, 0], [1, 2], [3, 4]]
    assert psd[0].topil().getpixel((1, 2)) == (4, 0, 0, 0)


def test_find_missing() -> None:
    psd = PSDDocument.frombytes(grouped_psd())
    assert psd.find("B") is None
    assert psd.find(["Folder"]) is None


def test_empty_document() -> None:
    psd = PSDDocument.frombytes(make_psd(5, 3))
    assert psd.size == (5, 3)
    assert len(psd) == 0
    assert list(psd) == []
    assert repr(psd) == "PSDDocument(size=5x3, layers=0)"


def test_unsupported_channel_kind() -> None:
    data = make_psd(1, 1, [pixel_layer("a", (0, 0, 1, 1), {0: b"\x05", -2: b"\x09"})])
    psd = PSDDocument.frombytes(data)
    assert int(psd[0].pixels[0]) == 0x05
    assert len(psd.warnings) == 1
    warning = psd.warnings[0]
    assert warning.kind == UNSUPPORTED_CHANNEL_KIND
    assert warning.layer_index == 0
    assert warning.channel_id == -2


def test_negative_layer_count() -> None:
    psd = PSDDocument.frombytes(single_layer_psd(layer_count=-1))
    assert [layer.path for layer in psd] == [["Layer 1"]]
    assert psd[0].pixels.tolist() == [v * 0x010101 for v in (30, 40, 10, 20)]


def test_trailing_sections_are_ignored() -> None:
    psd = PSDDocument.frombytes(
        single_layer_psd(trailer=b"\x00\x00\x00\x00") + b"\x00\x00" + b"\xff" * 12
    )
    assert len(psd) == 1


def test_open_filename(tmp_path) -> None:
    path = tmp_path / "example.psd"
    path.write_bytes(single_layer_psd())
    assert PSDDocument.open(path)[0].name == "Layer 1"
    assert PSDDocument.open(str(path))[0].name == "Layer 1"


def test_open_file_object() -> None:
    psd = PSDDocument.open(io.BytesIO(single_layer_psd()))
    assert psd[0].name == "Layer 1"


def test_decode() -> None:
    psd = psd_layers.decode(single_layer_psd())
    assert isinstance(psd, PSDDocument)
    assert psd[0].path == ["Layer 1"]


def test_encoding() -> None:
    data = make_psd(1, 1, [FakeLayer("Ebene ä", (0, 0, 1, 1))])
    assert PSDDocument.frombytes(data)[0].name == "Ebene ä"
    assert PSDDocument.frombytes(data, encoding="latin-1")[0].name == "Ebene \x8a"


def test_unmatched_group_close() -> None:
    data = make_psd(1, 1, [FakeLayer("A"), group_close()])
    with pytest.raises(InvalidGroupStructure) as excinfo:
        PSDDocument.frombytes(data)
    assert excinfo.value.layer_index == 1


@pytest.mark.parametrize(
    "kwargs, field",
    [
        (dict(depth=16), "depth"),
        (dict(color_mode=4), "color_mode"),
        (dict(version=2), "version"),
    ],
)
def test_unsupported_document(kwargs: dict, field: str) -> None:
    with pytest.raises(UnsupportedFormat) as excinfo:
        PSDDocument.frombytes(single_layer_psd(**kwargs))
    assert excinfo.value.field == field


def test_unsupported_compression() -> None:
    data = bytearray(single_layer_psd())
    # Replace the compression tag of the first channel with ZIP.
    offset = data.index(b"\x00\x00" + DATA)
    data[offset + 1] = Compression.ZIP
    with pytest.raises(UnsupportedFormat) as excinfo:
        PSDDocument.frombytes(bytes(data))
    assert excinfo.value.field == "compression"
    assert excinfo.value.layer_index == 0


def test_truncated() -> None:
    data = single_layer_psd()
    with pytest.raises(TruncatedInput):
        PSDDocument.frombytes(data[:-1])
    with pytest.raises(psd_layers.PSDError):
        PSDDocument.frombytes(b"")


def test_invalid_argument() -> None:
    with pytest.raises(TypeError):
        PSDDocument(b"8BPS")  # type: ignore[arg-type]


def test_from_low_level_structure() -> None:
    psd = PSDDocument(PSD.frombytes(single_layer_psd()))
    assert psd[0].name == "Layer 1"
