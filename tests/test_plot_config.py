"""Unit tests for option validation in build_plot_config()."""

import numpy as np
import pytest

from sigcompare.core.plot_config import (
    LinkAxes,
    PlotConfiguration,
    VLINE_WARN_THRESHOLD,
    build_plot_config,
)
from sigcompare.core.signal_data import (
    SignalMatrix,
    NoEvents,
    SharedEvents,
    PerChannelEvents,
    IndexAxis,
    SharedAxis,
    PerChannelAxis,
)


@pytest.fixture
def matrix():
    return SignalMatrix.from_array(np.zeros((3, 100)))


def test_defaults(matrix):
    config = build_plot_config(matrix)
    assert isinstance(config.x_axis, IndexAxis)
    assert config.channel_labels == ("1", "2", "3")
    assert config.link_axes is LinkAxes.X
    assert config.linespec == "-"
    assert config.num_plot_cols == 1
    assert config.plot_by_rows is True
    assert isinstance(config.markers, NoEvents)
    assert isinstance(config.vlines, NoEvents)
    assert config.logy == ()
    assert config.references == ()


def test_config_is_frozen(matrix):
    config = build_plot_config(matrix)
    with pytest.raises(AttributeError):
        config.linespec = "--"


@pytest.mark.parametrize(
    "signal_labels, expected",
    [
        (None, ("1", "2", "3")),
        ("", ("1", "2", "3")),
        ("EMG", ("EMG_1", "EMG_2", "EMG_3")),
        (["a", "b", "c"], ("a", "b", "c")),
    ],
)
def test_channel_labels(matrix, signal_labels, expected):
    assert build_plot_config(matrix, signal_labels=signal_labels).channel_labels == expected


def test_channel_label_count_mismatch(matrix):
    with pytest.raises(ValueError, match="signal_labels"):
        build_plot_config(matrix, signal_labels=["a", "b"])


def test_shared_time(matrix):
    t = np.linspace(0, 1, 100)
    config = build_plot_config(matrix, time=t)
    assert isinstance(config.x_axis, SharedAxis)
    np.testing.assert_array_equal(config.x_axis.for_channel(2, 100), t)


def test_time_length_mismatch(matrix):
    with pytest.raises(ValueError, match="time"):
        build_plot_config(matrix, time=np.arange(99))


def test_per_channel_time(matrix):
    times = [np.arange(100), np.arange(100) * 2, None]
    config = build_plot_config(matrix, time=times)
    assert isinstance(config.x_axis, PerChannelAxis)
    np.testing.assert_array_equal(config.x_axis.for_channel(1, 100), np.arange(100) * 2)
    np.testing.assert_array_equal(config.x_axis.for_channel(2, 100), np.arange(1, 101))


def test_per_channel_time_count_mismatch(matrix):
    with pytest.raises(ValueError, match="one entry per channel"):
        build_plot_config(matrix, time=[np.arange(100), np.arange(100)])


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, LinkAxes.NONE),
        ("", LinkAxes.NONE),
        ("x", LinkAxes.X),
        ("y", LinkAxes.Y),
        ("xy", LinkAxes.XY),
        ("YX", LinkAxes.XY),
    ],
)
def test_link_axes_parse(value, expected):
    assert LinkAxes.parse(value) is expected


def test_link_axes_parse_rejects_unknown():
    with pytest.raises(ValueError, match="link_axes"):
        LinkAxes.parse("z")


@pytest.mark.parametrize("link_axes", ["y", "xy"])
def test_y_link_conflicts_with_logy(matrix, link_axes):
    with pytest.raises(ValueError, match="logy"):
        build_plot_config(matrix, logy=[1], link_axes=link_axes)


def test_logy_with_x_link(matrix):
    config = build_plot_config(matrix, logy=[2, 0, 2], link_axes="x")
    assert config.logy == (0, 2)


def test_logy_out_of_range(matrix):
    with pytest.raises(ValueError, match="out of range"):
        build_plot_config(matrix, logy=[3])


def test_shared_markers(matrix):
    markers = np.zeros(100)
    markers[[5, 50]] = 1
    config = build_plot_config(matrix, markers=markers)
    assert isinstance(config.markers, SharedEvents)


def test_markers_length_mismatch(matrix):
    with pytest.raises(ValueError, match="markers"):
        build_plot_config(matrix, markers=np.zeros(99))


def test_per_channel_markers(matrix):
    config = build_plot_config(matrix, markers=[np.ones(100), [], None])
    assert isinstance(config.markers, PerChannelEvents)
    assert config.markers.for_channel(1) is None
    assert config.markers.for_channel(2) is None


def test_per_channel_markers_count_mismatch(matrix):
    with pytest.raises(ValueError, match="one entry per channel"):
        build_plot_config(matrix, markers=[np.ones(100), np.ones(100)])


def test_shared_vlines_with_labels(matrix):
    config = build_plot_config(matrix, vlines=[10, 20], vline_labels=["start", "stop"])
    assert isinstance(config.vlines, SharedEvents)
    assert config.vline_labels == (("start", "stop"),)


def test_shared_vline_label_count_mismatch(matrix):
    with pytest.raises(ValueError, match="one label per vline"):
        build_plot_config(matrix, vlines=[10, 20], vline_labels=["start"])


def test_per_channel_vlines_with_labels(matrix):
    config = build_plot_config(
        matrix, vlines=[[10], None, [30, 40]], vline_labels=[["a"], [], ["c", "d"]]
    )
    assert isinstance(config.vlines, PerChannelEvents)
    assert config.vline_labels == (("a",), (), ("c", "d"))


def test_vline_labels_without_vlines(matrix):
    with pytest.raises(ValueError, match="without vlines"):
        build_plot_config(matrix, vline_labels=["a"])


def test_many_vlines_warn(matrix):
    with pytest.warns(UserWarning, match="vertical lines"):
        build_plot_config(matrix, vlines=np.arange(VLINE_WARN_THRESHOLD))


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"num_plot_cols": 0}, ValueError),
        ({"num_plot_cols": 1.5}, TypeError),
        ({"plot_by_rows": "yes"}, TypeError),
        ({"linespec": 3}, TypeError),
        ({"xlab": 5}, TypeError),
        ({"link_axes": 1}, TypeError),
        ({"mat_labels": "abc"}, TypeError),
    ],
)
def test_rejects_bad_argument_types(matrix, kwargs, error):
    with pytest.raises(error):
        build_plot_config(matrix, **kwargs)


def test_ref_sigs_become_overlays(matrix):
    refs = [np.zeros((2, 100)), np.zeros((2, 100)), np.zeros((2, 100))]
    config = build_plot_config(matrix, ref_sigs=refs, mat_labels=["raw", "ref1", "ref2"])
    assert len(config.references) == 3
    assert config.references[0].primary_label == "raw"
    assert config.references[2].labels == ("ref1", "ref2")


def test_ref_sigs_count_mismatch(matrix):
    with pytest.raises(ValueError, match="ref_sigs"):
        build_plot_config(matrix, ref_sigs=[np.zeros(100)])


def test_grid_positions_row_major():
    config = PlotConfiguration(num_plot_cols=2, plot_by_rows=True)
    assert config.grid_shape(5) == (3, 2)
    assert [config.grid_position(i, 5) for i in range(5)] == [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0)]


def test_grid_positions_column_major():
    config = PlotConfiguration(num_plot_cols=2, plot_by_rows=False)
    assert [config.grid_position(i, 5) for i in range(5)] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1)]


def test_grid_columns_capped_by_channel_count():
    config = PlotConfiguration(num_plot_cols=4)
    assert config.grid_shape(2) == (1, 2)


def test_window_title_falls_back_to_plot_title():
    assert PlotConfiguration(plot_title="Plot").window_title == "Plot"
    assert PlotConfiguration(plot_title="Plot", fig_title="Window").window_title == "Window"
    assert PlotConfiguration().window_title is None
