"""Shared fixtures: a recording graphics-state target and a real page."""

from __future__ import annotations

import pytest

from cmforge.core.error import UnbalancedStateError
from cmforge.devices.pdf.content_stream import PageContent
from cmforge.operators.transformation import TransformationEmitter


class RecordingTarget:
    """Records every call the emitter makes, in order."""

    def __init__(self) -> None:
        self.events: list = []
        self.depth = 0

    def push_graphics_state(self) -> None:
        self.depth += 1
        self.events.append("push")

    def pop_graphics_state(self) -> None:
        if self.depth == 0:
            raise UnbalancedStateError("pop on empty stack")
        self.depth -= 1
        self.events.append("pop")

    def append_to_content_stream(self, line: str) -> None:
        self.events.append(line)

    @property
    def lines(self) -> list[str]:
        return [e for e in self.events if e not in ("push", "pop")]

    def count(self, kind: str) -> int:
        return sum(1 for e in self.events if e == kind)


@pytest.fixture()
def target() -> RecordingTarget:
    return RecordingTarget()


@pytest.fixture()
def emitter(target) -> TransformationEmitter:
    return TransformationEmitter(target)


@pytest.fixture()
def page() -> PageContent:
    return PageContent()


@pytest.fixture()
def page_emitter(page) -> TransformationEmitter:
    return TransformationEmitter(page)
