"""
Tests for the interface tools, the shared context and derived profiles.
"""
import csv

import numpy as np
import pytest

from georadar.config import con_dict
from georadar.interface import tools
from georadar.models import (
    ArrayTraceFile,
    CurrentContext,
    FoundPlace,
    HorizontalProfile,
    ScanProfile,
    TraceKey,
)


class TestConfig:

    def test_modify_casts_to_existing_type(self, monkeypatch):
        monkeypatch.setitem(con_dict, "distance_smoothing_window", 5)

        tools.modify_config("distance_smoothing_window", "9")

        assert tools.get_config()["distance_smoothing_window"] == 9

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            tools.modify_config("no_such_key", 1)


class TestLoad:

    def test_empty_or_missing_path(self, tmp_path):
        assert tools.load("") is None
        assert tools.load(tmp_path / "absent.npz") is None

    def test_registers_in_context(self, make_file, main_path):
        make_file(n=3).save(main_path)
        context = CurrentContext()

        tf = tools.load(main_path, context)

        assert context.active is tf
        assert context.files == [tf]
        assert tf.meta_file is not None


class TestCrop:

    def test_crop_logical_view(self, make_file):
        tf = make_file(n=6, with_meta=True)
        tf.update_trace_distances()

        tools.crop_traces(tf, 2, 5)

        assert [t.index for t in tf.traces] == [2, 3, 4]
        assert len(tf.raw_traces) == 6
        assert tf.distances is None

    def test_crop_needs_metadata(self, make_file):
        with pytest.raises(ValueError):
            tools.crop_traces(make_file(n=3), 0, 2)

    def test_empty_window(self, make_file):
        tf = make_file(n=3, with_meta=True)

        with pytest.raises(ValueError):
            tools.crop_traces(tf, 3, 3)
        assert len(tf.traces) == 3

    def test_crop_then_save_meta(self, make_file):
        tf = make_file(n=6, counts=[4, 4, 9, 4, 4, 4], with_meta=True)

        tools.crop_traces(tf, 3, 6)
        tf.save_meta()

        assert tf.meta_file.sample_range.max == 4


class TestMarkerSync:

    def test_sync_then_save(self, make_file):
        tf = make_file(n=5, with_meta=True)
        tf.aux_elements.extend([FoundPlace(TraceKey(tf, 1)), FoundPlace(TraceKey(tf, 3))])

        indices = tools.sync_marks_from_aux_elements(tf)
        tf.save_meta()

        assert indices == {1, 3}
        assert tf.meta_file.marks == {1, 3}

    def test_removed_marker_clears_flag(self, make_file):
        tf = make_file(n=3, marked=[True, True, False], with_meta=True)
        tf.copy_marked_traces_to_aux_elements(CurrentContext())
        tf.aux_elements.pop(0)

        tools.sync_marks_from_aux_elements(tf)

        assert [t.marked for t in tf.raw_traces] == [False, True, False]


class TestExport:

    def test_export_geo_data(self, make_file, tmp_path, meridian_positions):
        tf = make_file(n=5, positions=meridian_positions, with_meta=True)
        tf.update_trace_distances()

        path = tools.export_geo_data(tf, tmp_path / "line01.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0][0] == "index"
        assert len(rows) == 6
        assert float(rows[-1][4]) == pytest.approx(4 * 111.195, abs=1e-2)

    def test_stale_distances_dropped(self, make_file, tmp_path, meridian_positions):
        tf = make_file(n=5, positions=meridian_positions, with_meta=True)
        tf.update_trace_distances()
        tools.crop_traces(tf, 0, 3)
        tf.distances = np.zeros(5)

        path = tools.export_geo_data(tf, tmp_path / "line01.csv")

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert [r[4] for r in rows[1:]] == ["-999"] * 3

    def test_no_geo_data(self, plain_file, tmp_path):
        with pytest.raises(ValueError):
            tools.export_geo_data(plain_file, tmp_path / "x.csv")


class TestContext:

    def test_active_is_registered(self):
        context = CurrentContext()
        a = ArrayTraceFile.from_arrays([np.zeros(2)])
        b = ArrayTraceFile.from_arrays([np.zeros(2)])

        context.open(a)
        context.active = b

        assert context.files == [a, b]
        assert context.active is b
        assert context.has_files

    def test_close_active(self):
        context = CurrentContext()
        a = context.open(ArrayTraceFile.from_arrays([np.zeros(2)]))
        b = context.open(ArrayTraceFile.from_arrays([np.zeros(2)]))

        context.close(b)
        assert context.active is a

        context.close(a)
        assert context.active is None
        assert not context.has_files

    def test_marker_count(self, make_file):
        context = CurrentContext()
        tf = context.open(make_file(n=4, marked=[True, False, True, True]))

        tf.copy_marked_traces_to_aux_elements(context)

        assert context.marker_count == 3


class TestProfiles:

    def test_horizontal_summary(self):
        profile = HorizontalProfile([4, 8, 6])

        assert (profile.min_deep, profile.max_deep, profile.avg_deep) == (4, 8, 6.0)
        assert len(profile) == 3

    def test_finish_after_edit(self):
        profile = HorizontalProfile([4, 8, 6])
        profile.deep[1] = 2

        profile.finish()

        assert profile.max_deep == 6
        assert profile.min_deep == 2

    def test_empty_profile(self):
        profile = HorizontalProfile([])
        assert profile.max_deep == 0 and profile.avg_deep == 0.0

    def test_scan_radius_shape(self):
        assert len(ScanProfile([0.1, 0.5], radius=[3, 4])) == 2
        with pytest.raises(ValueError):
            ScanProfile([0.1, 0.5], radius=[3])

    def test_attach_to_file(self, make_file):
        tf = make_file(n=3, with_meta=True)
        tf.ground_profile = HorizontalProfile(np.zeros(len(tf.traces)))

        assert len(tf.ground_profile) == tf.num_traces()
