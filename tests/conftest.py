"""Pytest configuration for raycaster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def reference_scene():
    """The reference scene at a small 64x36 resolution."""
    from raycaster.scene.reference import create_reference_scene

    return create_reference_scene(64, 36)


@pytest.fixture
def no_taichi_init(monkeypatch):
    """Keep the CLI from re-initializing the session's Taichi runtime."""
    monkeypatch.setattr("raycaster.cli._init_taichi", lambda arch: None)
