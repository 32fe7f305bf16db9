"""Tests for the in-memory host."""

import pytest

from hostfs.adapters.host.memory import InMemoryHost, normalize, parent_of
from hostfs.ports.host import HostError, HostErrorTag
from tests.helpers import HostContractSuite


class TestInMemoryHostContract(HostContractSuite):
    """The in-memory host behaves like every other host."""

    def make_symlink(self, host: InMemoryHost, link: bytes, target: bytes) -> None:
        host.add_symlink(link, target)

    @pytest.fixture
    def host(self) -> InMemoryHost:
        return InMemoryHost()

    @pytest.fixture
    def root(self, host: InMemoryHost) -> bytes:
        host.create_dir(b"/work")
        return b"/work"


class TestRelativeRootContract(HostContractSuite):
    """Relative paths live under the '.' root."""

    def make_symlink(self, host: InMemoryHost, link: bytes, target: bytes) -> None:
        host.add_symlink(link, target)

    @pytest.fixture
    def host(self) -> InMemoryHost:
        return InMemoryHost()

    @pytest.fixture
    def root(self, host: InMemoryHost) -> bytes:
        host.create_dir(b"rel")
        return b"rel"


class TestNormalize:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (b"/a//b/", b"/a/b"),
            (b"./a/./b", b"a/b"),
            (b"/", b"/"),
            (b"", b"."),
            (b".", b"."),
            (b"a", b"a"),
        ],
    )
    def test_normalize(self, raw: bytes, expected: bytes) -> None:
        assert normalize(raw) == expected

    def test_nul_is_invalid_input(self) -> None:
        with pytest.raises(HostError) as excinfo:
            normalize(b"a\x00b")
        assert excinfo.value.tag == HostErrorTag.INVALID_INPUT.value

    @pytest.mark.parametrize(
        ("path", "parent"),
        [(b"/a/b", b"/a"), (b"/a", b"/"), (b"a", b"."), (b"a/b", b"a")],
    )
    def test_parent_of(self, path: bytes, parent: bytes) -> None:
        assert parent_of(path) == parent


class TestSymlinks:
    """Symlinks are followed for content access but not for queries."""

    def test_read_through_symlink(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/real", b"data")
        memory_host.add_symlink(b"/work/link", b"real")
        assert memory_host.read_all(b"/work/link") == b"data"

    def test_query_does_not_follow(self, memory_host: InMemoryHost) -> None:
        memory_host.create_dir(b"/work/dir")
        memory_host.add_symlink(b"/work/link", b"dir")
        path_type = memory_host.query_path_type(b"/work/link")
        assert path_type.is_symlink
        assert not path_type.is_dir

    def test_list_through_symlink(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/dir/f")
        memory_host.add_symlink(b"/work/link", b"/work/dir")
        assert memory_host.list_dir(b"/work/link") == [b"/work/link/f"]

    def test_delete_dir_all_on_symlink_is_not_a_directory(
        self, memory_host: InMemoryHost
    ) -> None:
        memory_host.add_file(b"/work/dir/f")
        memory_host.add_symlink(b"/work/link", b"dir")
        with pytest.raises(HostError) as excinfo:
            memory_host.delete_dir_all(b"/work/link")
        assert excinfo.value.tag == HostErrorTag.NOT_A_DIRECTORY.value
        assert memory_host.read_all(b"/work/dir/f") == b""

    def test_symlink_loop(self, memory_host: InMemoryHost) -> None:
        memory_host.add_symlink(b"/work/a", b"b")
        memory_host.add_symlink(b"/work/b", b"a")
        with pytest.raises(HostError) as excinfo:
            memory_host.read_all(b"/work/a")
        assert excinfo.value.tag == HostErrorTag.OTHER.value


    def test_symlink_loop_through_intermediate_component(
        self, memory_host: InMemoryHost
    ) -> None:
        memory_host.add_symlink(b"/work/a", b"a/x")
        with pytest.raises(HostError) as excinfo:
            memory_host.read_all(b"/work/a/f")
        assert excinfo.value.tag == HostErrorTag.OTHER.value


class TestAccessControl:
    def test_denied_path(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/secret/f", b"x")
        memory_host.deny(b"/work/secret")
        with pytest.raises(HostError) as excinfo:
            memory_host.read_all(b"/work/secret/f")
        assert excinfo.value.tag == HostErrorTag.PERMISSION_DENIED.value

    def test_readonly_file_rejects_writes(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/ro", b"orig", readonly=True)
        with pytest.raises(HostError) as excinfo:
            memory_host.write_bytes(b"/work/ro", b"new")
        assert excinfo.value.tag == HostErrorTag.PERMISSION_DENIED.value
        assert memory_host.read_all(b"/work/ro") == b"orig"
        assert memory_host.query_metadata(b"/work/ro").readonly

    def test_rename_into_own_subtree_is_invalid_input(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/a/f", b"x")
        with pytest.raises(HostError) as excinfo:
            memory_host.rename(b"/work/a", b"/work/a/b")
        assert excinfo.value.tag == HostErrorTag.INVALID_INPUT.value
        assert memory_host.list_dir(b"/work/a") == [b"/work/a/f"]

    def test_root_cannot_be_removed(self, memory_host: InMemoryHost) -> None:
        with pytest.raises(HostError) as excinfo:
            memory_host.delete_dir_all(b"/")
        assert excinfo.value.tag == HostErrorTag.PERMISSION_DENIED.value


class TestFileNodes:
    def test_write_to_directory(self, memory_host: InMemoryHost) -> None:
        with pytest.raises(HostError) as excinfo:
            memory_host.write_bytes(b"/work", b"x")
        assert excinfo.value.tag == HostErrorTag.IS_A_DIRECTORY.value

    def test_open_directory(self, memory_host: InMemoryHost) -> None:
        with pytest.raises(HostError) as excinfo:
            memory_host.open_stream(b"/work")
        assert excinfo.value.tag == HostErrorTag.IS_A_DIRECTORY.value

    def test_path_below_file_is_not_a_directory(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/f")
        with pytest.raises(HostError) as excinfo:
            memory_host.read_all(b"/work/f/child")
        assert excinfo.value.tag == HostErrorTag.NOT_A_DIRECTORY.value

    def test_rename_directory_moves_children(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/a/f", b"x")
        memory_host.rename(b"/work/a", b"/work/b")
        assert memory_host.read_all(b"/work/b/f") == b"x"
        assert memory_host.list_dir(b"/work") == [b"/work/b"]

    def test_open_handles_are_counted(self, memory_host: InMemoryHost) -> None:
        memory_host.add_file(b"/work/f")
        handle = memory_host.open_stream(b"/work/f")
        assert memory_host.open_handles == 1
        memory_host.close(handle)
        assert memory_host.open_handles == 0
