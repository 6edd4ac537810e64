import pytest

from filey import FileHandle, PathNormalizer


@pytest.fixture
def home(tmp_path):
    """A fake home directory inside the test's temp dir."""
    path = tmp_path / "home" / "meg"
    path.mkdir(parents=True)
    return str(path)


@pytest.fixture
def normalizer(tmp_path, home):
    return PathNormalizer(home=home, cwd=str(tmp_path))


@pytest.fixture
def test_dir(tmp_path, monkeypatch):
    """Run the test from tmp_path with an empty test_dir/ beneath it."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "test_dir").mkdir()
    return FileHandle("test_dir")
