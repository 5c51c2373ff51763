"""Shared fixtures for godecls tests."""

import pytest

from decl_parser import DeclarationParser


@pytest.fixture
def parser():
    """A parser bound to the Go grammar."""
    return DeclarationParser()


@pytest.fixture
def go_file(tmp_path):
    """Write Go source to a file under tmp_path and return its path as a string."""
    def _write(source, name="main.go"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)
    return _write
