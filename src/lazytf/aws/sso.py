"""AWS SSO session discovery and login.

Sessions are read from the ``[sso-session <name>]`` sections of the AWS CLI
config file.  Logging in shells out to ``aws sso login``, which opens a
browser for the user to authenticate.
"""

import configparser
from dataclasses import dataclass
from pathlib import Path

AWS_BINARY = "aws"
AWS_CONFIG_PATH = Path("~/.aws/config").expanduser()

_SECTION_PREFIX = "sso-session "


class AwsConfigError(Exception):
    """Raised when the AWS config file is missing or cannot be parsed."""


@dataclass(frozen=True)
class SSOSession:
    name: str
    start_url: str = ""
    region: str = ""
    scopes: str = ""


def discover_sso_sessions(config_path: Path | None = None) -> list[SSOSession]:
    """Return the SSO sessions declared in the AWS config, in file order."""
    path = config_path or AWS_CONFIG_PATH
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        with path.open(encoding="utf-8") as f:
            parser.read_file(f)
    except OSError as exc:
        raise AwsConfigError(f"failed to open AWS config file: {exc}") from exc
    except configparser.Error as exc:
        raise AwsConfigError(f"error reading AWS config file: {exc}") from exc

    sessions: list[SSOSession] = []
    for section in parser.sections():
        if not section.startswith(_SECTION_PREFIX):
            continue
        values = parser[section]
        sessions.append(
            SSOSession(
                name=section.removeprefix(_SECTION_PREFIX).strip(),
                start_url=values.get("sso_start_url", ""),
                region=values.get("sso_region", ""),
                scopes=values.get("sso_registration_scopes", ""),
            )
        )
    return sessions


def sso_login_args(session: SSOSession) -> list[str]:
    return ["sso", "login", "--sso-session", session.name]


def sso_login_invocation(session: SSOSession) -> tuple[str, list[str], str | None]:
    """Return ``(command, args, cwd)`` for ``aws sso login``."""
    return AWS_BINARY, sso_login_args(session), None
