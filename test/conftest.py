from pathlib import Path

import pytest

from yamlstream import Settings, Stream


@pytest.fixture(autouse=True)
def no_strict_override(monkeypatch):
    monkeypatch.delenv(Settings.STRICT, raising=False)


@pytest.fixture
def data_dir():
    return Path(__file__).absolute().parent / "data"


@pytest.fixture
def simple_yaml(data_dir):
    return data_dir / "simple.yaml"


@pytest.fixture
def simple_stream_yaml(data_dir):
    return data_dir / "simple_stream.yaml"


@pytest.fixture
def bundle_yaml(data_dir):
    return data_dir / "bundle.yaml"


@pytest.fixture
def malformed_yaml(data_dir):
    return data_dir / "malformed.yaml"


@pytest.fixture
def stream():

    def _stream(content, strict=True):
        ys = Stream(Settings(strict=strict))
        ys.read(content)
        return ys

    return _stream
