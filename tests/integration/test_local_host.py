"""Integration tests for LocalHost against the real filesystem."""

import os
import sys
from pathlib import Path

import pytest

from hostfs.adapters.factory import Filesystem
from hostfs.adapters.host.local import LocalHost
from hostfs.domain.entities import PathType
from hostfs.domain.errors import DirErrorKind, ReadErrorKind, WriteErrorKind
from hostfs.domain.path import NativePath, from_bytes, from_text
from hostfs.ports.host import HostError, HostErrorTag
from tests.helpers import HostContractSuite

requires_symlinks = pytest.mark.skipif(
    not hasattr(os, "symlink") or sys.platform == "win32",
    reason="symlinks need privileges on Windows",
)

unprivileged_posix = pytest.mark.skipif(
    os.name != "posix" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="needs POSIX permissions enforced for a non-root user",
)


class TestLocalHostContract(HostContractSuite):
    """LocalHost satisfies the shared host contract."""

    def make_symlink(self, host: LocalHost, link: bytes, target: bytes) -> None:
        if sys.platform == "win32":
            pytest.skip("symlinks need privileges on Windows")
        os.symlink(target, link)

    @pytest.fixture
    def host(self) -> LocalHost:
        return LocalHost()

    @pytest.fixture
    def root(self, tmp_root: bytes) -> bytes:
        return tmp_root


class TestLocalHostSpecifics:
    """Behavior that depends on the operating system."""

    def test_open_directory_is_a_directory(self, local_host: LocalHost, tmp_root: bytes) -> None:
        with pytest.raises(HostError) as excinfo:
            local_host.open_stream(tmp_root)
        assert excinfo.value.tag == HostErrorTag.IS_A_DIRECTORY.value

    def test_delete_file_on_directory(self, local_host: LocalHost, tmp_path: Path) -> None:
        (tmp_path / "d").mkdir()
        with pytest.raises(HostError) as excinfo:
            local_host.delete_file(os.fsencode(tmp_path / "d"))
        assert excinfo.value.tag == HostErrorTag.IS_A_DIRECTORY.value
        assert (tmp_path / "d").is_dir()

    def test_delete_dir_all_on_file(self, local_host: LocalHost, tmp_path: Path) -> None:
        (tmp_path / "f").write_bytes(b"x")
        with pytest.raises(HostError) as excinfo:
            local_host.delete_dir_all(os.fsencode(tmp_path / "f"))
        assert excinfo.value.tag == HostErrorTag.NOT_A_DIRECTORY.value

    def test_nul_in_path_is_invalid_input(self, local_host: LocalHost, tmp_root: bytes) -> None:
        with pytest.raises(HostError) as excinfo:
            local_host.read_all(tmp_root + b"/a\x00b")
        assert excinfo.value.tag == HostErrorTag.INVALID_INPUT.value

    def test_close_unknown_handle(self, local_host: LocalHost) -> None:
        with pytest.raises(HostError) as excinfo:
            local_host.close(12345)
        assert excinfo.value.tag == HostErrorTag.BAD_HANDLE.value

    @requires_symlinks
    def test_symlink_to_directory_is_symlink(
        self, local_fs: Filesystem, tmp_path: Path
    ) -> None:
        (tmp_path / "target").mkdir()
        (tmp_path / "link").symlink_to(tmp_path / "target", target_is_directory=True)

        path_type = local_fs.files.query_type(from_text(str(tmp_path / "link"))).unwrap()

        assert path_type is PathType.IS_SYMLINK

    @requires_symlinks
    def test_delete_all_on_symlink_keeps_target(
        self, local_fs: Filesystem, tmp_path: Path
    ) -> None:
        (tmp_path / "target").mkdir()
        (tmp_path / "target" / "keep").write_bytes(b"x")
        (tmp_path / "link").symlink_to(tmp_path / "target", target_is_directory=True)

        result = local_fs.dirs.delete_all(from_text(str(tmp_path / "link")))

        assert result.error.kind is DirErrorKind.NOT_A_DIRECTORY
        assert (tmp_path / "target" / "keep").exists()


@pytest.mark.posix
@pytest.mark.skipif(
    os.name != "posix" or sys.platform == "darwin",
    reason="filesystem must accept arbitrary bytes in names",
)
class TestNonUtf8Names:
    """Byte-backed paths reach files whose names are not valid text."""

    def test_write_list_and_read_back(self, local_fs: Filesystem, tmp_root: bytes) -> None:
        raw_name = os.path.join(tmp_root, b"caf\xe9.txt")
        local_fs.files.write_bytes(b"latin-1 name", from_bytes(raw_name)).unwrap()

        listed = local_fs.dirs.list(from_bytes(tmp_root)).unwrap()

        assert listed == [NativePath(raw_name)]
        assert local_fs.files.read_bytes(listed[0]).unwrap() == b"latin-1 name"
        assert "�" in listed[0].display()

    def test_text_path_with_surrogate_escape(self, local_fs: Filesystem, tmp_root: bytes) -> None:
        name = os.fsdecode(os.path.join(tmp_root, b"\xff"))
        local_fs.files.write_text("x", from_text(name)).unwrap()
        assert os.path.exists(os.path.join(tmp_root, b"\xff"))


@pytest.mark.posix
@unprivileged_posix
class TestPermissions:
    """Permission failures are classified, not reported as OTHER."""

    @pytest.fixture
    def locked_dir(self, tmp_path: Path):
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "f").write_bytes(b"secret")
        locked.chmod(0)
        yield locked
        locked.chmod(0o755)

    def test_read_denied(self, local_fs: Filesystem, locked_dir: Path) -> None:
        result = local_fs.files.read_bytes(from_text(str(locked_dir / "f")))
        assert result.error.kind is ReadErrorKind.PERMISSION_DENIED

    def test_list_denied(self, local_fs: Filesystem, locked_dir: Path) -> None:
        result = local_fs.dirs.list(from_text(str(locked_dir)))
        assert result.error.kind is DirErrorKind.PERMISSION_DENIED

    def test_write_denied(self, local_fs: Filesystem, locked_dir: Path) -> None:
        result = local_fs.files.write_bytes(b"x", from_text(str(locked_dir / "new")))
        assert result.error.kind is WriteErrorKind.PERMISSION_DENIED

    def test_readonly_metadata(self, local_fs: Filesystem, tmp_path: Path) -> None:
        path = tmp_path / "ro"
        path.write_bytes(b"x")
        path.chmod(0o444)
        meta = local_fs.files.metadata(from_text(str(path))).unwrap()
        assert meta.readonly
