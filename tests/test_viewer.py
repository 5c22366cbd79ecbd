import pytest

from paleo_doc_utils.viewer import ViewMode, ViewState, EXPORT_FILENAME, export_bytes


def test_defaults():
    view = ViewState()
    assert view.mode == ViewMode.SPLIT
    assert view.zoom == 1.0
    assert view.zoom_label == "100%"
    assert view.shows_image and view.shows_text


def test_zoom_steps_and_clamps():
    view = ViewState()
    for _ in range(10):
        view = view.zoom_in()
    assert view.zoom == 4.0
    assert view.zoom_label == "400%"

    view = view.zoom_out()
    assert view.zoom == 3.5

    for _ in range(10):
        view = view.zoom_out()
    assert view.zoom == 1.0


@pytest.mark.parametrize("zoom,expected", [(0.2, 1.0), (2.5, 2.5), (9, 4.0)])
def test_constructor_clamps(zoom, expected):
    assert ViewState(zoom=zoom).zoom == expected


def test_modes():
    assert not ViewState(mode=ViewMode.TEXT_ONLY).shows_image
    assert not ViewState(mode=ViewMode.IMAGE_ONLY).shows_text

    view = ViewState(zoom=2.0).with_mode("IMAGE_ONLY")
    assert view.mode == ViewMode.IMAGE_ONLY
    assert view.zoom == 2.0


def test_image_width_follows_zoom():
    assert ViewState(zoom=1.5).image_width(600) == 900


def test_export():
    assert EXPORT_FILENAME == "transcription.txt"
    assert export_bytes("Señor, d[ich]o") == "Señor, d[ich]o".encode("utf-8")
