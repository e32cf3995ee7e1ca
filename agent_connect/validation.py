"""Business rules checked before a configuration is compiled.

Field types and shapes are enforced by pydantic when the configuration is
built; the checks here cover cross-field rules the collector relies on.
"""

from agent_connect import constants
from agent_connect.settings import AgentConfig


class ConfigValidationError(Exception):
    """Exception raised when the agent configuration is rejected."""


class LicenseLengthError(ConfigValidationError):
    """Exception raised when the license key has the wrong length."""


class AppNameMissingError(ConfigValidationError):
    """Exception raised when an enabled agent has no application name."""


class AppNameLimitError(ConfigValidationError):
    """Exception raised when too many rollup application names are given."""


class HighSecuritySecurityPoliciesError(ConfigValidationError):
    """Exception raised when high security and security policies are combined."""


def validate_config(config: AgentConfig) -> None:
    """Check the configuration against the collector's rules.

    Args:
        config: Configuration to check.

    Raises:
        ConfigValidationError: On the first rule that does not hold.
    """
    license_length = len(config.license_key)
    if config.enabled:
        if license_length != constants.LICENSE_LENGTH:
            raise LicenseLengthError(
                f"license length is not {constants.LICENSE_LENGTH}"
            )
    # a disabled agent may run without a license
    elif license_length not in (0, constants.LICENSE_LENGTH):
        raise LicenseLengthError(f"license length is not {constants.LICENSE_LENGTH}")

    if config.high_security and config.security_policies_token:
        raise HighSecuritySecurityPoliciesError(
            "high security and security policies token cannot both be set"
        )

    if config.enabled and not config.app_name:
        raise AppNameMissingError("app_name is required")

    if config.app_name.count(constants.APP_NAME_SEPARATOR) >= constants.APP_NAME_LIMIT:
        raise AppNameLimitError(
            f"max of {constants.APP_NAME_LIMIT} rollup application names"
        )
