"""Shared test fixtures for askline.

Provides an in-memory line source / prompt writer pair and a controller
wired to them.
"""

import pytest

from askline.controller import RetryController
from askline.ui.io import BufferedWriter, QueueLineSource


@pytest.fixture
def source() -> QueueLineSource:
    return QueueLineSource()


@pytest.fixture
def writer() -> BufferedWriter:
    return BufferedWriter()


@pytest.fixture
def controller(source: QueueLineSource, writer: BufferedWriter) -> RetryController:
    return RetryController(source, writer)
