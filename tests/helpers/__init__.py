"""Test helper modules for the cbtr test suite.

- io_utils: writing YAML config documents and marker files
- fakes: in-memory stand-ins for executable lookup and command runners
- commands: portable child-process commands built on ``sys.executable``
"""
from __future__ import annotations
