"""Step definitions for connect payload scenarios."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from pytest_bdd import given, when, then, parsers, scenarios


# Helper functions
def load_payload(command_result):
    """Parse the connect payload printed on stdout."""
    try:
        payload = json.loads(command_result["stdout"])
    except json.JSONDecodeError as e:
        pytest.fail(
            f"Failed to parse JSON from output: {e}. stdout: {command_result['stdout']}"
        )
    assert isinstance(payload, list) and len(payload) == 1, payload
    return payload[0]


def assert_log_contains(command_result, expected_text):
    """Assert that log output contains the expected text."""
    combined_output = command_result["stdout"] + command_result["stderr"]
    assert expected_text in combined_output, (
        f"Expected text '{expected_text}' not found in output. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


def run_compiler(project_root, config_path, extra_args, env_vars, command_result):
    """Run the command line with --print-payload-and-exit and store the result."""
    command = [sys.executable, "-m", "agent_connect.main"]
    if config_path is not None:
        command.extend(["--config", str(config_path)])
    command.extend(extra_args)
    command.append("--print-payload-and-exit")

    env = os.environ.copy()
    env.update(env_vars)

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=30,
            cwd=project_root,
            env=env,
        )
    except subprocess.TimeoutExpired:
        pytest.fail("Command timed out")
    command_result["returncode"] = result.returncode
    command_result["stdout"] = result.stdout
    command_result["stderr"] = result.stderr


# Load scenarios from the feature file
scenarios("../features/connect_payload.feature")


@pytest.fixture
def project_root():
    """Get the repository root, where the agent_connect package lives."""
    return Path(__file__).parent.parent.parent.parent


@pytest.fixture
def fixtures_dir():
    """Get the path to test fixtures directory."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def command_result():
    """Store the result of running a command."""
    return {}


@pytest.fixture
def env_vars():
    """Store environment variables for the test."""
    return {}


@pytest.fixture
def config_file():
    """Store the config file selected by the scenario."""
    return {}


# Given steps
@given(parsers.parse('the config file "{name}"'))
def select_config_file(fixtures_dir, config_file, name):
    config_file["path"] = fixtures_dir / name


@given(parsers.parse('I set environment variable "{var_name}" to "{var_value}"'))
def set_environment_variable(env_vars, var_name, var_value):
    """Set an environment variable for the test."""
    env_vars[var_name] = var_value


# When steps
@when("I print the connect payload")
def print_connect_payload(project_root, config_file, env_vars, command_result):
    run_compiler(project_root, config_file.get("path"), [], env_vars, command_result)


@when(parsers.parse('I print the connect payload with args "{args}"'))
def print_connect_payload_with_args(
    project_root, config_file, env_vars, command_result, args
):
    run_compiler(
        project_root, config_file.get("path"), args.split(), env_vars, command_result
    )


# Then steps
@then(parsers.parse("the exit code must be {code:d}"))
def check_exit_code(command_result, code):
    assert command_result["returncode"] == code, (
        f"Expected exit code {code}, got {command_result['returncode']}. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


@then(parsers.parse('the payload field "{field}" must be "{expected_value}"'))
def check_payload_field(command_result, field, expected_value):
    payload = load_payload(command_result)
    assert str(payload.get(field, "")) == expected_value, (
        f"Expected {field}='{expected_value}', got {field}='{payload.get(field)}'"
    )


@then(
    parsers.parse(
        'the payload metadata must contain "{key}" with value "{expected_value}"'
    )
)
def check_payload_metadata(command_result, key, expected_value):
    payload = load_payload(command_result)
    assert payload["metadata"].get(key) == expected_value, payload["metadata"]


@then(parsers.parse('the log must contain "{expected_text}"'))
def check_log_contains_text(command_result, expected_text):
    """Check that the log contains the expected text."""
    assert_log_contains(command_result, expected_text)


@then(parsers.parse('the output must not contain "{unexpected_text}"'))
def check_output_does_not_contain(command_result, unexpected_text):
    combined_output = command_result["stdout"] + command_result["stderr"]
    assert unexpected_text not in combined_output
