# config.py - action inputs, read from the INPUT_* variables set by the runner
import math
import os
from dataclasses import dataclass

from check_annotator.errors import ConfigError, ContextError

DEFAULT_MAX_ATTEMPTS = 50
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MAX_RETRY_DELAY = 10.0


def get_input(name, environ=None, required=False):
    """Mirror of @actions/core getInput: `fooBar` is read from INPUT_FOOBAR."""
    environ = os.environ if environ is None else environ
    value = environ.get('INPUT_' + name.replace(' ', '_').upper(), '').strip()
    if required and not value:
        raise ConfigError(f'Input required and not supplied: {name}')
    return value


def _number(name, raw, cast, default, minimum, exclusive=False):
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f'Input {name} must be a number, got {raw!r}') from None
    if not math.isfinite(value):
        raise ConfigError(f'Input {name} must be a finite number, got {raw!r}')
    if exclusive and value <= minimum:
        raise ConfigError(f'Input {name} must be greater than {minimum}, got {value}')
    if value < minimum:
        raise ConfigError(f'Input {name} must be at least {minimum}, got {value}')
    return value


@dataclass(frozen=True)
class ActionInputs:
    github_token: str
    report_path: str
    check_run_name_env_var: str
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_retry_delay: float = DEFAULT_MAX_RETRY_DELAY

    def __repr__(self):
        # keep the token out of tracebacks and logs
        return (f'ActionInputs(report_path={self.report_path!r}, '
                f'check_run_name_env_var={self.check_run_name_env_var!r}, '
                f'max_attempts={self.max_attempts})')

    def check_run_name_part(self, environ=None):
        """Value of the variable named by checkRunNameEnvVar, used to pick our check run."""
        environ = os.environ if environ is None else environ
        value = environ.get(self.check_run_name_env_var)
        if value is None:
            raise ContextError(f'Environment variable {self.check_run_name_env_var} is not set')
        return value

    @staticmethod
    def from_env(environ=None):
        retry_delay = _number('retryDelay', get_input('retryDelay', environ), float, DEFAULT_RETRY_DELAY, 0,
                              exclusive=True)
        max_retry_delay = _number('maxRetryDelay', get_input('maxRetryDelay', environ), float,
                                  max(DEFAULT_MAX_RETRY_DELAY, retry_delay), retry_delay)
        return ActionInputs(
            github_token=get_input('githubToken', environ, required=True),
            report_path=get_input('reportPath', environ, required=True),
            check_run_name_env_var=get_input('checkRunNameEnvVar', environ, required=True),
            max_attempts=_number('maxAttempts', get_input('maxAttempts', environ), int, DEFAULT_MAX_ATTEMPTS, 1),
            retry_delay=retry_delay,
            max_retry_delay=max_retry_delay,
        )
