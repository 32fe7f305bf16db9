"""Test helper utilities for the hostfs test suite."""

from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_files_created,
    assert_output_contains,
    assert_output_matches,
)
from tests.helpers.host_contract import HostContractSuite

__all__ = [
    "HostContractSuite",
    "assert_command_success",
    "assert_command_failed",
    "assert_output_matches",
    "assert_output_contains",
    "assert_error_message",
    "assert_files_created",
]
