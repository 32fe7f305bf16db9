"""Tests for CLI error formatting."""

import click
import pytest

from hostfs.core.errors import HostfsCliError, fs_error_to_cli, invalid_extension_error
from hostfs.domain.errors import (
    DecodeError,
    DirError,
    DirErrorKind,
    HostfsError,
    ReadError,
    ReadErrorKind,
)
from hostfs.domain.path import from_text


class TestHostfsCliError:
    """Tests for HostfsCliError exception class."""

    def test_error_without_hint(self) -> None:
        error = HostfsCliError("Something failed")
        assert error.format_message() == "Something failed"

    def test_error_with_hint(self) -> None:
        error = HostfsCliError("Something failed", hint="Try again")
        assert error.format_message() == "Something failed\nHint: Try again"

    def test_is_click_exception(self) -> None:
        assert isinstance(HostfsCliError("x"), click.ClickException)
        assert HostfsCliError("x").exit_code == 1


class TestFsErrorToCli:
    """Classified errors become CLI errors with hints."""

    def test_modeled_kind_gets_hint(self) -> None:
        error = ReadError(ReadErrorKind.NOT_FOUND, "not found", from_text("notes.txt"))
        cli_error = fs_error_to_cli(error)
        assert cli_error.message == "Failed to read 'notes.txt': not found"
        assert "hostfs stat" in cli_error.hint

    def test_other_keeps_host_message(self) -> None:
        error = DirError(DirErrorKind.OTHER, "Directory not empty", from_text("d"))
        cli_error = fs_error_to_cli(error)
        assert cli_error.message == "Failed to access directory 'd': Directory not empty"
        assert cli_error.hint is None

    def test_decode_error_suggests_bytes(self) -> None:
        error = DecodeError("Invalid UTF-8: invalid start byte", from_text("bin"), 3)
        cli_error = fs_error_to_cli(error)
        assert "offset 3" in cli_error.message
        assert "--bytes" in cli_error.hint

    def test_plain_hostfs_error(self) -> None:
        cli_error = fs_error_to_cli(HostfsError("boom"))
        assert cli_error.message == "boom"
        assert cli_error.hint is None


class TestInvalidExtensionError:
    def test_always_raises(self) -> None:
        with pytest.raises(HostfsCliError, match="Invalid extension 'a/b'") as exc_info:
            invalid_extension_error("a/b")
        assert exc_info.value.hint
