"""Unit tests for semzones.store."""

from semzones.buffer import LineBuffer
from semzones.models import Direction, ZoneKind
from semzones.store import ZoneContext, ZoneRegistry


class TestZoneContext:
    def test_record_appends_in_arrival_order(self, buffer):
        ctx = ZoneContext(buffer)
        first = ctx.record_zone(ZoneKind.PROMPT_START, 3)
        second = ctx.record_zone(ZoneKind.INPUT_START, 1)
        assert ctx.markers == [first, second]
        assert (first.seq, second.seq) == (0, 1)

    def test_resolve_sorts_by_position(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.OUTPUT_START, 7)
        ctx.record_zone(ZoneKind.PROMPT_START, 2)
        ctx.record_zone(ZoneKind.INPUT_START, 4)
        resolved = ctx.resolve_positions()
        assert [(m.kind, m.row) for m in resolved] == [
            (ZoneKind.PROMPT_START, 2),
            (ZoneKind.INPUT_START, 4),
            (ZoneKind.OUTPUT_START, 7),
        ]

    def test_same_row_keeps_arrival_order(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.OUTPUT_END, 5)
        ctx.record_zone(ZoneKind.PROMPT_START, 5)
        ctx.record_zone(ZoneKind.INPUT_START, 5)
        kinds = [m.kind for m in ctx.resolve_positions()]
        assert kinds == [ZoneKind.OUTPUT_END, ZoneKind.PROMPT_START, ZoneKind.INPUT_START]

    def test_resolve_follows_buffer_edits(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.PROMPT_START, 10)
        buffer.insert_lines(0, ["new"] * 3)
        assert ctx.resolve_positions()[0].row == 13

    def test_invalidated_markers_are_skipped_but_kept(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.PROMPT_START, 1)
        ctx.record_zone(ZoneKind.INPUT_START, 2)
        buffer.delete_lines(2, 3)
        assert [m.kind for m in ctx.resolve_positions()] == [ZoneKind.PROMPT_START]
        assert len(ctx.markers) == 2

    def test_prune_is_idempotent(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.PROMPT_START, 1)
        ctx.record_zone(ZoneKind.INPUT_START, 2)
        buffer.delete_lines(2, 3)
        assert ctx.prune() == 1
        assert ctx.prune() == 0
        assert len(ctx.markers) == 1
        assert buffer.anchor_count == 1

    def test_clear_releases_anchors_and_direction(self, buffer):
        ctx = ZoneContext(buffer)
        ctx.record_zone(ZoneKind.PROMPT_START, 1)
        ctx.last_direction = Direction.FORWARD
        ctx.clear()
        assert ctx.markers == []
        assert ctx.last_direction is None
        assert buffer.anchor_count == 0


class TestZoneRegistry:
    def test_attach_returns_same_context(self):
        registry = ZoneRegistry()
        buf = LineBuffer()
        assert registry.attach(buf) is registry.attach(buf)
        assert buf in registry
        assert len(registry) == 1

    def test_context_creates_lazily(self):
        registry = ZoneRegistry()
        buf = LineBuffer()
        assert buf not in registry
        ctx = registry.context(buf)
        assert ctx.buffer is buf
        assert buf in registry

    def test_contexts_are_independent(self):
        registry = ZoneRegistry()
        one, two = LineBuffer(), LineBuffer()
        registry.context(one).record_zone(ZoneKind.PROMPT_START, 0)
        assert registry.context(two).markers == []

    def test_detach_then_reuse_starts_empty(self):
        registry = ZoneRegistry()
        buf = LineBuffer()
        registry.context(buf).record_zone(ZoneKind.PROMPT_START, 0)
        registry.detach(buf)
        assert buf not in registry
        assert buf.anchor_count == 0
        assert registry.context(buf).markers == []

    def test_detach_unknown_buffer_is_noop(self):
        registry = ZoneRegistry()
        registry.detach(LineBuffer())
        assert len(registry) == 0
