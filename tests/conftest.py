import importlib
import pytest

@pytest.fixture(scope="session")
def logic():
    return importlib.import_module("memory_viewer.logic")

@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(b"Hello, memory!\x00\x01" + bytes(range(0x20, 0x30)) + b"\tHello\xff")
    return path
