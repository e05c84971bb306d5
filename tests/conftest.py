"""
Pytest configuration for android-netcfg.
"""

import pytest

from android_netcfg.accessors import build_accessors
from android_netcfg.schema import Catalog

from mocks import FakeCommandRunner, RecordingConsoleUI, build_schema, device_environ, make_proc_tree, write_schema


@pytest.fixture
def proc_dir(tmp_path):
    """Fake /proc/sys/net/ipv4 directory with writable parameter files."""
    return make_proc_tree(tmp_path)


@pytest.fixture
def proc_root(proc_dir):
    """Stand-in for /proc/sys/net that kernel parameter paths must live under."""
    return str(proc_dir.parent)


@pytest.fixture
def schema_path(tmp_path, proc_dir):
    return write_schema(tmp_path, build_schema(proc_dir))


@pytest.fixture
def catalog(schema_path):
    return Catalog.load(schema_path)


@pytest.fixture
def runner():
    return FakeCommandRunner()


@pytest.fixture
def environ():
    return device_environ()


@pytest.fixture
def accessors(runner, environ, proc_root):
    return build_accessors(runner, environ, proc_root)


@pytest.fixture
def ui():
    return RecordingConsoleUI(verbose=True)
