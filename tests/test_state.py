"""Tests for session state and parameters."""
import pytest
from pydantic import ValidationError

from test_tools import _square_track


class TestBounds:
    def test_default_bounds_not_set(self):
        from track_routing.models import Bounds
        assert Bounds().is_set is False

    def test_valid_bounds(self):
        from track_routing.models import Bounds
        b = Bounds(north=48.0, south=47.0, east=-121.0, west=-122.0, is_set=True)
        assert b.lat_range == pytest.approx(1.0)
        assert b.center_lon == pytest.approx(-121.5)

    def test_single_point_bounds_allowed(self):
        from track_routing.models import Bounds
        b = Bounds(north=47.0, south=47.0, east=-121.0, west=-121.0, is_set=True)
        assert b.lat_range == 0.0

    def test_north_must_not_be_below_south_when_set(self):
        from track_routing.models import Bounds
        with pytest.raises(ValidationError):
            Bounds(north=47.0, south=48.0, east=-121.0, west=-122.0, is_set=True)

    def test_east_must_not_be_west_of_west_when_set(self):
        from track_routing.models import Bounds
        with pytest.raises(ValidationError):
            Bounds(north=48.0, south=47.0, east=-122.0, west=-121.0, is_set=True)


class TestRoutingParams:
    def test_defaults(self):
        from track_routing.state import RoutingParams
        p = RoutingParams()
        assert p.hit_threshold_px == 22.0
        assert p.wave_interval_s == 0.0001
        assert p.track_dir is None

    def test_threshold_must_be_positive(self):
        from track_routing.state import RoutingParams
        with pytest.raises(ValidationError):
            RoutingParams(hit_threshold_px=0)

    def test_assignment_is_validated(self):
        from track_routing.state import RoutingParams
        p = RoutingParams()
        with pytest.raises(ValidationError):
            p.wave_interval_s = -1.0


class TestSessionState:
    def test_set_tracks_fills_presenter_and_clears_graph(self):
        from track_routing.core.graph import build_graph
        from track_routing.state import SessionState
        s = SessionState()
        s.set_tracks([_square_track("a")])
        s.graph = build_graph(s.tracks)

        s.set_tracks([_square_track("a"), _square_track("b")])

        assert s.graph is None
        assert [t.name for t in s.presenter.tracks] == ["a", "b"]

    def test_set_tracks_drops_duplicates(self):
        from track_routing.state import SessionState
        s = SessionState()
        s.set_tracks([_square_track("a"), _square_track("a"), _square_track("b")])

        assert [t.name for t in s.tracks] == ["a", "b"]
        assert len(s.presenter.tracks) == len(s.tracks)
        assert s.summary()["tracks"]["count"] == 2

    def test_viewport_covers_padded_region(self):
        from track_routing.state import SessionState
        s = SessionState()
        s.set_tracks([_square_track()])
        vp = s.viewport()
        assert vp.bounds.north > 52.01
        assert vp.bounds.south < 52.00

    def test_viewport_without_tracks(self):
        from track_routing.state import SessionState
        with pytest.raises(ValueError):
            SessionState().viewport()

    def test_summary_keys(self):
        from track_routing.state import SessionState
        summary = SessionState().summary()
        assert set(summary) == {"tracks", "region", "graph", "params", "preview"}
        assert summary["region"] is None
