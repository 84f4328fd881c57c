import numpy as np
import pytest

from mazecam_lib.analysis import EdgeMask, build_quadtree
from mazecam_lib.rendering import ASCIIRenderer, NullSink, WindowSink, draw_overlay
from mazecam_lib.schema import DeadEndPoint, DirectionDecision, FrameResult

from conftest import mask_from_points


def test_overlay_marks_dead_ends_on_a_copy():
    frame = np.zeros((100, 100, 3), dtype=np.uint8)
    result = FrameResult(dead_ends=[DeadEndPoint(50, 50)])
    canvas = draw_overlay(frame, result)
    assert tuple(canvas[50, 50]) == (0, 0, 255)
    assert tuple(canvas[50, 52]) == (0, 0, 255)
    assert tuple(canvas[50, 57]) == (0, 0, 0)
    assert not frame.any()


def test_overlay_draws_direction_text():
    frame = np.zeros((100, 300, 3), dtype=np.uint8)
    canvas = draw_overlay(frame, FrameResult(direction=DirectionDecision.HALT))
    text_area = canvas[5:40, 5:150]
    assert (text_area[..., 0] == 255).any()
    assert not text_area[..., 2].any()


def test_overlay_without_decision_draws_nothing():
    frame = np.zeros((100, 300, 3), dtype=np.uint8)
    assert not draw_overlay(frame, FrameResult()).any()


def test_overlay_accepts_gray_frames():
    canvas = draw_overlay(np.zeros((20, 20), dtype=np.uint8), FrameResult())
    assert canvas.shape == (20, 20, 3)


def test_null_sink_counts_frames():
    sink = NullSink()
    assert sink.show(np.zeros((4, 4, 3), dtype=np.uint8), FrameResult())
    assert sink.frames_shown == 1
    sink.close()
    assert sink.closed


@pytest.fixture
def fake_highgui(mocker):
    mocks = {
        "imshow": mocker.patch("mazecam_lib.rendering.overlay.cv2.imshow"),
        "waitKey": mocker.patch("mazecam_lib.rendering.overlay.cv2.waitKey", return_value=-1),
        "getWindowProperty": mocker.patch(
            "mazecam_lib.rendering.overlay.cv2.getWindowProperty", return_value=1.0
        ),
        "destroyWindow": mocker.patch("mazecam_lib.rendering.overlay.cv2.destroyWindow"),
    }
    return mocks


def test_window_sink_keeps_running(fake_highgui):
    sink = WindowSink("test")
    assert sink.show(np.zeros((10, 10, 3), dtype=np.uint8), FrameResult())
    fake_highgui["imshow"].assert_called_once()


def test_window_sink_quit_key(fake_highgui):
    fake_highgui["waitKey"].return_value = ord("q")
    assert not WindowSink("test").show(np.zeros((10, 10, 3), dtype=np.uint8), FrameResult())


def test_window_sink_closed_window(fake_highgui):
    fake_highgui["getWindowProperty"].return_value = 0.0
    assert not WindowSink("test").show(np.zeros((10, 10, 3), dtype=np.uint8), FrameResult())


def test_window_sink_close_is_idempotent(fake_highgui):
    sink = WindowSink("test")
    sink.close()
    fake_highgui["destroyWindow"].assert_not_called()
    sink.show(np.zeros((10, 10, 3), dtype=np.uint8), FrameResult())
    sink.close()
    sink.close()
    fake_highgui["destroyWindow"].assert_called_once_with("test")


def test_ascii_renderer_empty_mask():
    mask = EdgeMask(np.zeros((20, 20), dtype=np.uint8))
    renderer = ASCIIRenderer(cell_size=10)
    renderer.render_tree(build_quadtree(mask), mask)
    assert renderer.get_output() == "..\n.."


def test_ascii_renderer_marks_dead_ends(line_mask):
    renderer = ASCIIRenderer(cell_size=10)
    renderer.render_tree(build_quadtree(line_mask), line_mask)
    assert renderer.get_output() == "X"


def test_ascii_renderer_mixed_leaves():
    stroke = [(x, 5) for x in range(2, 8)]
    mask = mask_from_points(40, 40, stroke + [(25, 25)])
    renderer = ASCIIRenderer(cell_size=10)
    renderer.render_tree(build_quadtree(mask), mask)
    lines = renderer.get_output().split("\n")
    assert len(lines) == 4
    assert lines[0][0] == "X"
    assert lines[2][2] == "#"
    assert lines[3][0] == "."
