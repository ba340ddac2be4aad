"""Shared pytest fixtures for tracker tests."""

import pytest


@pytest.fixture(autouse=True)
def clear_tracker_env(monkeypatch):
    """Keep a developer's TRACKER_DIR from leaking into tests."""
    monkeypatch.delenv("TRACKER_DIR", raising=False)


@pytest.fixture
def issues_dir(tmp_path):
    """Create an initialized .issues directory under a temporary project root."""
    from tracker_core import init_issues_dir

    return init_issues_dir(tmp_path)


@pytest.fixture
def sample_markdown():
    """A fully populated issue file as written by hand."""
    return """---
id: 3
title: Fix parser crash
status: in-progress
priority: high
created: 2026-01-01T09:00:00Z
updated: 2026-01-02T09:00:00Z
labels: [bug, "parser"]
assignee: claude
project: core
blocks: [5, 6]
blocked_by: [1, 2]
---

# Fix parser crash

## Description
The parser crashes on empty input.

Steps to reproduce are in the log.

## Progress
- [2026-01-01T10:00:00] Started work
- [2026-01-01T12:30:00] Found the root cause
"""


@pytest.fixture
def write_raw(issues_dir):
    """Write arbitrary text into the issues directory and return the path."""

    def _write(name, content):
        path = issues_dir / name
        path.write_text(content)
        return path

    return _write
