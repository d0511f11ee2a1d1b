"""Tests for graph construction and wave traversal."""
import inspect

import pytest


def _c(lat, lon):
    from track_routing.models import Coordinate
    return Coordinate(latitude=lat, longitude=lon)


def _track(coords, name="t", number=0):
    from track_routing.models import Track, TrackColor
    return Track(points=coords, color=TrackColor.PINK, number=number, name=name)


A, B, C, D, E = (_c(53.10, 13.00), _c(53.10, 13.01), _c(53.11, 13.01),
                 _c(53.11, 13.00), _c(53.12, 13.02))


class TestBuildGraph:
    def test_loop_closure_adds_one_edge_per_point(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C, D])])
        assert graph.edge_count == 4
        assert [d.coordinate for d in graph.edges[D]] == [A]

    def test_edge_distance_matches_metric(self):
        from track_routing.core.distance import geographic_distance
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C])])
        for source, destinations in graph.edges.items():
            for dest in destinations:
                assert dest.distance == geographic_distance(source, dest.coordinate)

    def test_custom_metric(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B])], metric=lambda a, b: 7.0)
        assert all(d.distance == 7.0 for ds in graph.edges.values() for d in ds)

    def test_disjoint_tracks_add_up(self):
        from track_routing.core.graph import build_graph
        t1 = _track([A, B, C], name="one")
        t2 = _track([D, E], name="two")
        merged = build_graph([t1, t2])
        assert merged.edge_count == build_graph([t1]).edge_count + build_graph([t2]).edge_count
        assert merged.edge_count == 5

    def test_shared_vertex_collects_destinations_from_both_tracks(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C], name="one"), _track([A, D, E], name="two")])
        assert [d.coordinate for d in graph.edges[A]] == [B, D]

    def test_duplicate_edges_are_kept(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B], name="one"), _track([A, B], name="two")])
        assert [d.coordinate for d in graph.edges[A]] == [B, B]
        assert graph.edge_count == 4

    def test_single_point_track_is_a_self_loop(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A])])
        assert [d.coordinate for d in graph.edges[A]] == [A]
        assert graph.edges[A][0].distance == 0.0

    def test_empty_track_is_skipped(self):
        from track_routing.core.graph import build_graph
        from track_routing.models import Track, TrackColor
        broken = Track.model_construct(points=(), color=TrackColor.RED, number=1, name="broken")
        graph = build_graph([broken, _track([A, B])])
        assert graph.edge_count == 2

    def test_no_tracks_gives_empty_graph(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([])
        assert graph.vertices == []
        assert graph.edge_count == 0


class TestReadOnly:
    def test_built_graph_is_frozen(self):
        from track_routing.core.graph import GraphFrozenError, build_graph
        graph = build_graph([_track([A, B])])
        assert graph.frozen
        with pytest.raises(GraphFrozenError):
            graph.add_edge(A, C)

    def test_edges_view_rejects_assignment(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B])])
        with pytest.raises(TypeError):
            graph.edges[C] = ()

    def test_destinations_of_unknown_vertex(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B])])
        assert graph.destinations(E) == ()

    def test_random_vertex_is_reproducible(self):
        import numpy as np
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C, D])])
        v1 = graph.random_vertex(np.random.default_rng(3))
        v2 = graph.random_vertex(np.random.default_rng(3))
        assert v1 == v2
        assert v1 in graph.edges

    def test_random_vertex_of_empty_graph(self):
        from track_routing.core.graph import Graph
        with pytest.raises(ValueError):
            Graph().random_vertex()


class TestConnectedWaves:
    def test_simple_loop(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C, D])])
        waves = graph.connected_waves(A)
        assert waves == [[(A, B)], [(B, C)], [(C, D)], [(D, A)], []]

    def test_every_reachable_vertex_is_a_source_once(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C], name="one"), _track([C, B, A], name="two")])
        waves = graph.connected_waves(A)
        assert waves[-1] == []
        sources = [source for wave in waves[:-1] for source in {s for s, _ in wave}]
        assert sorted(sources, key=lambda c: (c.latitude, c.longitude)) == sorted(
            [A, B, C], key=lambda c: (c.latitude, c.longitude)
        )

    def test_bidirectional_loop_waves(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C], name="one"), _track([C, B, A], name="two")])
        waves = graph.connected_waves(A)
        assert len(waves) == 3
        assert set(waves[0]) == {(A, B), (A, C)}
        assert set(waves[1]) == {(B, C), (B, A), (C, A), (C, B)}

    def test_vertex_reached_twice_in_a_wave_is_expanded_once(self):
        from track_routing.core.graph import Graph
        graph = Graph()
        graph.add_edge(A, B)
        graph.add_edge(A, C)
        graph.add_edge(B, D)
        graph.add_edge(C, D)
        graph.add_edge(D, E)
        graph.freeze()
        waves = graph.connected_waves(A)
        assert waves[1] == [(B, D), (C, D)]
        assert waves[2] == [(D, E)]
        assert waves[-1] == []

    def test_unknown_start_vertex(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B])])
        assert graph.connected_waves(E) == [[], []]

    def test_iter_waves_is_lazy(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B, C])])
        waves = graph.iter_waves(A)
        assert inspect.isgenerator(waves)
        assert next(waves) == [(A, B)]

    def test_unreachable_part_is_not_visited(self):
        from track_routing.core.graph import build_graph
        graph = build_graph([_track([A, B], name="one"), _track([D, E], name="two")])
        waves = graph.connected_waves(A)
        touched = {v for wave in waves for edge in wave for v in edge}
        assert touched == {A, B}
