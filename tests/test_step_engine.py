"""Tests for resumable algorithm states and the StepEngine session."""

import pytest

from algorithms.bfs import bfs
from algorithms.dijkstra import dijkstra
from algorithms.prim import prim
from engine import (
    BfsState,
    DijkstraState,
    EventKind,
    Phase,
    PrimState,
    SPEED_PRESETS,
    StepEngine,
    init,
    step,
)
from graph import InvalidNode, InvalidParameter, UnknownAlgorithm, generate_random_connected


def kinds(events):
    return [e.kind for e in events]


def drain(state):
    """Step until finished; return (final_state, [events per step])."""
    per_step = []
    finished = False
    while not finished:
        state, events, finished = step(state)
        per_step.append(events)
    return state, per_step


# =============================================================================
# init
# =============================================================================

class TestInit:

    @pytest.mark.parametrize("name,cls", [("bfs", BfsState), ("Prim", PrimState), ("DIJKSTRA", DijkstraState)])
    def test_state_types(self, name, cls, path_graph):
        state = init(name, path_graph, 0)
        assert isinstance(state, cls)
        assert not state.started and not state.finished
        assert state.steps_taken == 0

    @pytest.mark.parametrize("name", ["dfs", "kruskal", "floyd_warshall", "astar"])
    def test_non_steppable_rejected(self, name, path_graph):
        with pytest.raises(UnknownAlgorithm):
            init(name, path_graph)

    def test_bad_source(self, path_graph):
        with pytest.raises(InvalidNode):
            init("bfs", path_graph, 3)

    def test_bad_target(self, path_graph):
        with pytest.raises(InvalidNode):
            init("dijkstra", path_graph, 0, target=-1)

    def test_target_ignored_outside_dijkstra(self, path_graph):
        assert init("bfs", path_graph, 0, target=2).target is None


# =============================================================================
# Purity
# =============================================================================

class TestPurity:

    def test_step_does_not_mutate_input(self, weighted_graph):
        s0 = init("dijkstra", weighted_graph, 0)
        s1, events, _ = step(s0)
        assert events
        assert s0.distances == [0, None, None, None, None]
        assert not s0.visited and not s0.started
        assert s1.visited == {0}
        assert s1.graph is s0.graph

    def test_replaying_an_old_state_is_deterministic(self, weighted_graph):
        s0 = init("prim", weighted_graph, 0)
        s1, first, _ = step(s0)
        again, second, _ = step(s0)
        assert first == second
        assert again.tree_order == s1.tree_order

    def test_finished_state_is_returned_unchanged(self, path_graph):
        final, _ = drain(init("bfs", path_graph, 0))
        result = step(final)
        assert result.state is final
        assert result.events == ()
        assert result.finished


# =============================================================================
# BFS
# =============================================================================

class TestBfsSteps:

    def test_path_scenario(self, path_graph):
        state = init("bfs", path_graph, 0)

        state, events, finished = step(state)
        assert [(e.kind, e.node, e.level) for e in events] == [(EventKind.NODE_ENTERED, 0, 0)]
        assert not finished

        state, events, finished = step(state)
        assert [(e.kind, e.node, e.level) for e in events] == [
            (EventKind.NODE_ENTERED, 1, 1),
            (EventKind.NODE_FINALIZED, 0, 0),
        ]
        assert not finished

        state, events, finished = step(state)
        assert [(e.kind, e.node, e.level) for e in events] == [
            (EventKind.NODE_ENTERED, 2, 2),
            (EventKind.NODE_FINALIZED, 1, 1),
        ]
        assert not finished

        state, events, finished = step(state)
        assert kinds(events) == [EventKind.NODE_FINALIZED, EventKind.TERMINAL_COMPLETE]
        assert events[0].node == 2
        assert finished
        assert not state.queue

    def test_single_node(self, make_graph):
        state, per_step = drain(init("bfs", make_graph(1, []), 0))
        assert [kinds(s) for s in per_step] == [
            [EventKind.NODE_ENTERED],
            [EventKind.NODE_FINALIZED, EventKind.TERMINAL_COMPLETE],
        ]

    def test_matches_batch_bfs(self, split_graph):
        state, per_step = drain(init("bfs", split_graph, 3))
        entered = [e.node for events in per_step for e in events if e.kind is EventKind.NODE_ENTERED]
        assert tuple(entered) == bfs(split_graph, 3).order
        assert state.levels == bfs(split_graph, 3).levels


# =============================================================================
# Prim
# =============================================================================

class TestPrimSteps:

    def test_two_phase_commit(self, weighted_graph):
        state = init("prim", weighted_graph, 0)

        state, events, _ = step(state)
        assert [(e.kind, e.node) for e in events] == [(EventKind.NODE_IN_TREE, 0)]

        state, events, _ = step(state)
        assert kinds(events) == [EventKind.EDGE_SELECTED, EventKind.NODE_ENTERING_TREE]
        assert events[0].edge.key == (0, 2)
        assert state.candidate is not None
        assert 2 not in state.in_tree

        state, events, _ = step(state)
        assert [(e.kind, e.node) for e in events] == [(EventKind.NODE_IN_TREE, 2)]
        assert state.candidate is None
        assert 2 in state.in_tree

    def test_matches_batch_prim(self, weighted_graph):
        state, per_step = drain(init("prim", weighted_graph, 0))
        batch = prim(weighted_graph, 0)
        assert tuple(state.tree_edges) == batch.edges
        assert state.total_weight == batch.total_weight
        assert kinds(per_step[-1])[-1] is EventKind.TERMINAL_COMPLETE
        # seed + (select, commit) per edge
        assert len(per_step) == 1 + 2 * len(batch.edges)

    def test_stops_at_component_boundary(self, split_graph):
        state, per_step = drain(init("prim", split_graph, 3))
        assert state.in_tree == {3, 4}
        assert state.finished
        assert per_step[-1][-1].kind is EventKind.TERMINAL_COMPLETE

    def test_isolated_source_finishes_on_first_step(self, make_graph):
        g = make_graph(3, [(1, 2, 1)])
        state, events, finished = step(init("prim", g, 0))
        assert finished
        assert kinds(events) == [EventKind.NODE_IN_TREE, EventKind.TERMINAL_COMPLETE]


# =============================================================================
# Dijkstra
# =============================================================================

class TestDijkstraSteps:

    def test_path_found(self, weighted_graph):
        state, per_step = drain(init("dijkstra", weighted_graph, 0, target=4))
        last = per_step[-1]
        assert kinds(last)[:1] == [EventKind.NODE_SELECTED]
        assert kinds(last)[-2:] == [EventKind.NODE_FINALIZED, EventKind.TERMINAL_PATH_FOUND]
        assert last[-1].path == (0, 2, 3, 4)
        assert last[-1].distance == 8
        assert state.path_found is True

    def test_relaxation_events(self, weighted_graph):
        state = init("dijkstra", weighted_graph, 0)
        state, events, _ = step(state)
        assert [(e.kind, e.node, e.distance) for e in events] == [
            (EventKind.NODE_SELECTED, 0, 0),
            (EventKind.DISTANCE_IMPROVED, 1, 4),
            (EventKind.DISTANCE_IMPROVED, 2, 1),
            (EventKind.NODE_FINALIZED, 0, 0),
        ]

    def test_no_path(self, split_graph):
        state, per_step = drain(init("dijkstra", split_graph, 0, target=4))
        assert per_step[-1][-1].kind is EventKind.TERMINAL_NO_PATH
        assert state.path_found is False
        assert state.visited == {0, 1, 2}

    def test_complete_without_target(self, weighted_graph):
        state, per_step = drain(init("dijkstra", weighted_graph, 0))
        assert per_step[-1][-1].kind is EventKind.TERMINAL_COMPLETE
        assert tuple(state.distances) == dijkstra(weighted_graph, 0).distances
        assert len(per_step) == 5

    def test_source_is_target(self, path_graph):
        _, per_step = drain(init("dijkstra", path_graph, 1, target=1))
        assert len(per_step) == 1
        assert per_step[0][-1].path == (1,)
        assert per_step[0][-1].distance == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_agrees_with_batch(self, seed):
        g = generate_random_connected(15, density=0.3, seed=seed)
        state, _ = drain(init("dijkstra", g, 0))
        assert tuple(state.distances) == dijkstra(g, 0).distances


# =============================================================================
# StepEngine session
# =============================================================================

class TestStepEngine:

    def test_phases(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        assert engine.phase is Phase.READY
        engine.step()
        assert engine.phase is Phase.RUNNING
        engine.pause()
        assert engine.phase is Phase.PAUSED
        engine.step()
        assert engine.phase is Phase.PAUSED
        engine.play()
        assert engine.is_playing
        engine.run_to_completion()
        assert engine.phase is Phase.FINISHED

    def test_finished_step_is_empty(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.run_to_completion()
        result = engine.step()
        assert result.events == ()
        assert result.finished

    def test_play_after_finish_is_ignored(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.run_to_completion()
        engine.play()
        assert engine.phase is Phase.FINISHED

    def test_toggle_play(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.toggle_play()
        assert engine.phase is Phase.RUNNING
        engine.toggle_play()
        assert engine.phase is Phase.PAUSED

    def test_history_and_run_to_completion(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.step()
        events = engine.run_to_completion()
        assert len(engine.history) == 1 + len(events)
        assert engine.last_event.kind is EventKind.TERMINAL_COMPLETE

    def test_reset_discards_state_and_bumps_generation(self, weighted_graph):
        engine = StepEngine("dijkstra", weighted_graph, 0, target=4)
        engine.step()
        engine.step()
        old = engine.generation
        new = engine.reset()
        assert new == old + 1
        assert engine.phase is Phase.READY
        assert engine.history == []
        assert not engine.state.started
        assert engine.state.target == 4

    def test_stale_generation_is_a_no_op(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        armed = engine.generation
        engine.reset()
        result = engine.step(armed)
        assert result.events == ()
        assert engine.phase is Phase.READY
        assert not engine.state.started
        assert engine.step(engine.generation).events

    def test_reset_with_new_algorithm_and_graph(self, path_graph, weighted_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.step()
        engine.reset(graph=weighted_graph, source=1, algorithm="prim")
        assert engine.algorithm == "prim"
        assert engine.state.graph is weighted_graph
        assert engine.state.source == 1

    def test_reset_onto_smaller_graph_falls_back_to_node_zero(self, make_graph, path_graph):
        big = make_graph(10, [(i, i + 1, 1) for i in range(9)])
        engine = StepEngine("bfs", big, source=7)
        armed = engine.generation
        engine.step()
        engine.reset(graph=path_graph)
        assert engine.state.graph is path_graph
        assert engine.state.source == 0
        assert engine.generation == armed + 1
        assert engine.step(armed).events == ()
        assert not engine.state.started

    def test_reset_onto_smaller_graph_drops_missing_target(self, weighted_graph, path_graph):
        engine = StepEngine("dijkstra", weighted_graph, 1, target=4)
        engine.reset(graph=path_graph)
        assert engine.state.source == 1
        assert engine.state.target is None

    def test_reset_keeps_target_that_still_exists(self, weighted_graph, path_graph):
        engine = StepEngine("dijkstra", weighted_graph, 0, target=2)
        engine.reset(graph=path_graph)
        assert engine.state.target == 2

    def test_reset_with_none_clears_target(self, weighted_graph):
        engine = StepEngine("dijkstra", weighted_graph, 0, target=4)
        engine.reset(target=None)
        assert engine.state.target is None
        engine.run_to_completion()
        assert engine.last_event.kind is EventKind.TERMINAL_COMPLETE

    def test_explicit_bad_source_keeps_previous_run(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        engine.step()
        with pytest.raises(InvalidNode):
            engine.reset(source=9)
        assert engine.generation == 0
        assert engine.state.started

    def test_speed(self, path_graph):
        engine = StepEngine("bfs", path_graph, 0)
        assert engine.interval == SPEED_PRESETS["medium"]
        engine.set_speed("turbo")
        assert engine.interval == 0.05
        engine.set_speed_value(0.001)
        assert engine.interval == 0.02
        with pytest.raises(InvalidParameter):
            engine.set_speed("warp")

    def test_snapshot_is_plain_data(self, weighted_graph):
        engine = StepEngine("prim", weighted_graph, 0)
        engine.step()
        engine.step()
        snap = engine.snapshot()
        assert snap["phase"] == "running"
        assert snap["generation"] == 0
        assert snap["state"]["algorithm"] == "prim"
        assert snap["state"]["candidate"] == {"source": 0, "target": 2, "weight": 1}
        assert snap["message"].startswith("Node 2")
