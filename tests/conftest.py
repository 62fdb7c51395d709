"""Pytest configuration and fixtures for buildpkg tests."""

import sys
from io import StringIO

import pytest

from buildpkg import output


@pytest.fixture(autouse=True)
def _restore_output():  # noqa: PT004
    """Restore buildpkg.output module state after each test.

    Tests that redirect the output stream or toggle verbose mode must not
    leak that state into later tests.
    """
    stream = output._output_stream
    verbose = output._verbose
    yield
    output._output_stream = stream
    output._verbose = verbose
    if sys.stdout.closed:
        sys.stdout = sys.__stdout__


@pytest.fixture
def output_stream() -> StringIO:
    """Redirect buildpkg.output to an in-memory stream and return it."""
    stream = StringIO()
    output.init_timer(output_stream=stream)
    return stream
