"""
Unit tests for frame scheduling and the host region.
"""

import pygame

from host import HostRegion
from scheduler import FrameScheduler


class FakeElement:
    def __init__(self, name, z_index, log):
        self.name = name
        self.z_index = z_index
        self.log = log

    def draw(self, target, origin):
        self.log.append((self.name, origin))


class TestFrameScheduler:
    def test_runs_callbacks_in_request_order(self):
        scheduler = FrameScheduler()
        calls = []
        scheduler.request_frame(lambda: calls.append("a"))
        scheduler.request_frame(lambda: calls.append("b"))
        assert scheduler.tick() == 2
        assert calls == ["a", "b"]
        assert scheduler.tick() == 0

    def test_requests_during_tick_run_next_tick(self):
        scheduler = FrameScheduler()
        calls = []

        def loop():
            calls.append(len(calls))
            scheduler.request_frame(loop)

        scheduler.request_frame(loop)
        scheduler.tick()
        assert calls == [0]
        scheduler.tick()
        assert calls == [0, 1]

    def test_cancel(self):
        scheduler = FrameScheduler()
        calls = []
        handle = scheduler.request_frame(lambda: calls.append("x"))
        scheduler.cancel_frame(handle)
        scheduler.tick()
        assert calls == []
        # Unknown handles are ignored.
        scheduler.cancel_frame(999)

    def test_cancel_during_tick(self):
        scheduler = FrameScheduler()
        calls = []
        handles = {}
        handles["first"] = scheduler.request_frame(lambda: scheduler.cancel_frame(handles["second"]))
        handles["second"] = scheduler.request_frame(lambda: calls.append("second"))
        scheduler.tick()
        assert calls == []


class TestHostRegion:
    def test_resize_notifies_only_on_change(self):
        host = HostRegion(pygame.Rect(0, 0, 800, 600))
        calls = []
        host.add_resize_listener(lambda: calls.append(host.content_size()))
        host.resize(800, 600)
        assert calls == []
        host.resize(400, 300)
        assert calls == [(400, 300)]

    def test_removed_listener_not_called(self):
        host = HostRegion(pygame.Rect(0, 0, 10, 10))
        calls = []

        def listener():
            calls.append(1)

        host.add_resize_listener(listener)
        host.remove_resize_listener(listener)
        host.resize(20, 20)
        assert calls == []

    def test_render_in_z_order(self):
        host = HostRegion(pygame.Rect(5, 7, 100, 100))
        log = []
        host.append_child(FakeElement("marker", 2, log))
        host.append_child(FakeElement("overlay", 0, log))
        host.append_child(FakeElement("marker2", 2, log))
        host.render(pygame.Surface((200, 200)))
        assert log == [("overlay", (5, 7)), ("marker", (5, 7)), ("marker2", (5, 7))]

    def test_remove_child(self):
        host = HostRegion(pygame.Rect(0, 0, 10, 10))
        element = FakeElement("a", 0, [])
        host.append_child(element)
        host.remove_child(element)
        host.remove_child(element)
        assert host.children == []
