"""
Tests for PathNormalizer and the home directory lookup.
"""

import os

import pytest

from filey import HomeDirUnavailable, NotADirectory, NotFound, PathNormalizer
from filey.config import lookup_home


class TestAbsolutize:
    """Lexical absolutization."""

    def test_relative_joins_cwd(self, normalizer, tmp_path):
        assert normalizer.absolutize("src/lib.py") == os.path.join(str(tmp_path), "src", "lib.py")

    def test_resolves_dots_lexically(self, normalizer, tmp_path):
        assert normalizer.absolutize("a/./b/../c") == os.path.join(str(tmp_path), "a", "c")
        assert normalizer.absolutize("/x/y/../z") == "/x/z"

    def test_absolute_unchanged(self, normalizer):
        assert normalizer.absolutize("/usr/lib") == "/usr/lib"

    def test_idempotent(self, normalizer):
        for p in ["a/b", "../x", "/q/./r/..", "."]:
            once = normalizer.absolutize(p)
            assert normalizer.absolutize(once) == once

    def test_does_not_touch_filesystem(self, normalizer, tmp_path):
        result = normalizer.absolutize("missing/dir/../file.txt")
        assert result == os.path.join(str(tmp_path), "missing", "file.txt")
        assert not os.path.lexists(result)

    def test_default_cwd_is_process_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert PathNormalizer(home="/h").absolutize("f") == os.path.join(os.getcwd(), "f")

    def test_callable_cwd(self):
        assert PathNormalizer(home="/h", cwd=lambda: "/work").absolutize("f") == "/work/f"

    def test_does_not_need_home(self, tmp_path):
        n = PathNormalizer(environ={}, cwd=str(tmp_path))
        assert n.absolutize("~/x") == os.path.join(str(tmp_path), "~", "x")

    def test_expand_requires_home(self, tmp_path):
        n = PathNormalizer(environ={}, cwd=str(tmp_path))
        with pytest.raises(HomeDirUnavailable):
            n.absolutize("~/x", expand=True)

    def test_expand(self, normalizer, home):
        assert normalizer.absolutize("~/docs/../a", expand=True) == os.path.join(home, "a")


class TestCanonicalize:
    """Resolution against the real filesystem."""

    def test_follows_symlink(self, normalizer, tmp_path):
        real = tmp_path / "real.txt"
        real.write_text("x")
        (tmp_path / "link.txt").symlink_to(real)
        assert normalizer.canonicalize("link.txt") == os.path.realpath(str(real))

    def test_symlinked_directory_component(self, normalizer, tmp_path):
        (tmp_path / "d").mkdir()
        (tmp_path / "d" / "f").write_text("")
        (tmp_path / "alias").symlink_to(tmp_path / "d")
        assert normalizer.canonicalize("alias/f") == os.path.realpath(str(tmp_path / "d" / "f"))

    def test_missing_component(self, normalizer):
        with pytest.raises(NotFound):
            normalizer.canonicalize("nope/file.txt")

    def test_missing_final(self, normalizer, tmp_path):
        with pytest.raises(NotFound) as info:
            normalizer.canonicalize("absent.txt")
        assert isinstance(info.value, FileNotFoundError)

    def test_dangling_symlink(self, normalizer, tmp_path):
        (tmp_path / "dangling").symlink_to(tmp_path / "gone")
        with pytest.raises(NotFound):
            normalizer.canonicalize("dangling")

    def test_file_used_as_directory(self, normalizer, tmp_path):
        (tmp_path / "plain.txt").write_text("")
        with pytest.raises(NotADirectory):
            normalizer.canonicalize("plain.txt/child")

    @pytest.mark.parametrize("suffix", ["..", "."])
    def test_file_followed_by_dot_segment(self, normalizer, tmp_path, suffix):
        """'..' and '.' after a regular file are not folded away."""
        (tmp_path / "plain.txt").write_text("")
        with pytest.raises(NotADirectory):
            normalizer.canonicalize("plain.txt/" + suffix)

    def test_missing_then_dot_dot(self, normalizer, tmp_path):
        with pytest.raises(NotFound):
            normalizer.canonicalize("absent/..")


class TestTilde:
    """Tilde expansion and contraction."""

    def test_expand(self, normalizer, home):
        assert normalizer.expand_user("~/audio") == home + "/audio"
        assert normalizer.expand_user("~") == home

    def test_expand_only_first_tilde(self, normalizer, home):
        assert normalizer.expand_user("~/a~b") == home + "/a~b"

    def test_expand_without_leading_tilde(self, normalizer):
        assert normalizer.expand_user("a/~/b") == "a/~/b"

    def test_contract(self, normalizer, home):
        assert normalizer.contract_user(home + "/cats.png") == "~/cats.png"
        assert normalizer.contract_user(home) == "~"

    def test_contract_outside_home(self, normalizer):
        assert normalizer.contract_user("/etc/hosts") == "/etc/hosts"

    def test_contract_needs_segment_boundary(self, normalizer, home):
        assert normalizer.contract_user(home + "an/x") == home + "an/x"

    def test_round_trip(self, normalizer, home):
        for p in [home, home + "/a", home + "/a/b/c.txt"]:
            assert normalizer.expand_user(normalizer.contract_user(p)) == p

    def test_root_home(self):
        n = PathNormalizer(home="/")
        assert n.expand_user("~/a") == "/a"
        assert n.contract_user("/a") == "~/a"
        assert n.expand_user(n.contract_user("/a/b")) == "/a/b"

    def test_home_from_environment(self):
        n = PathNormalizer(environ={"HOME": "/home/tom/"})
        assert n.expand_user("~/x") == "/home/tom/x"
        assert n.contract_user("/home/tom/x") == "~/x"

    def test_home_read_per_call(self):
        env = {}
        n = PathNormalizer(environ=env)
        with pytest.raises(HomeDirUnavailable):
            n.expand_user("~/x")
        env["HOME"] = "/home/ann"
        assert n.expand_user("~/x") == "/home/ann/x"

    def test_contract_without_home(self):
        with pytest.raises(HomeDirUnavailable):
            PathNormalizer(environ={}).contract_user("/x")


class TestLookupHome:
    """Environment validation for the home directory."""

    def test_reads_home(self):
        assert lookup_home({"HOME": "/home/lisa"}) == "/home/lisa"

    def test_override_variable(self):
        env = {"FILEY_HOME_VAR": "MYHOME", "MYHOME": "/data/me", "HOME": "/home/x"}
        assert lookup_home(env) == "/data/me"

    def test_unset(self):
        with pytest.raises(HomeDirUnavailable, match="not set") as info:
            lookup_home({})
        assert info.value.variable == "HOME"

    def test_empty(self):
        with pytest.raises(HomeDirUnavailable, match="empty"):
            lookup_home({"HOME": ""})

    @pytest.mark.parametrize("name", ["HO=ME", "HO\0ME", ""])
    def test_malformed_name(self, name):
        with pytest.raises(HomeDirUnavailable, match="invalid environment variable name"):
            lookup_home({"HOME": "/h"}, name=name)

    def test_not_valid_text(self):
        with pytest.raises(HomeDirUnavailable, match="unicode"):
            lookup_home({"HOME": "/home/\udcff"})
