"""GitHub credential providers.

A credential provider hands the invoker the value of the ``Authorization``
header for each request. An empty value means the request is sent
unauthenticated.
"""

import base64
import logging
import os
import re
import subprocess
from typing import Protocol

from gh_commands.github.errors import AuthenticationError

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Anything that can produce an Authorization header value."""

    def get_auth_header_value(self) -> str: ...


def _get_gh_cli_token() -> str | None:
    """Try to get token from GitHub CLI.

    Returns:
        Token from `gh auth token` or None if not available.
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
        if result.returncode == 0:
            token = result.stdout.strip()
            if token:
                logger.info("Using GitHub token from gh CLI")
                return token
        else:
            logger.debug(
                "gh CLI returned non-zero exit code (%d). "
                "Ensure you are authenticated with 'gh auth login'",
                result.returncode,
            )
    except FileNotFoundError:
        logger.debug("gh CLI not found, continuing without it")
    except subprocess.TimeoutExpired:
        logger.debug("gh CLI command timed out after 5 seconds")
    return None


class GitHubAuth:
    """Token credential provider.

    Loads a token from, in order:
    1. Explicit token parameter
    2. The configured environment variable (GITHUB_TOKEN by default)
    3. GitHub CLI (`gh auth token`)

    Without a token the provider runs unauthenticated unless ``required`` is
    set. Token prefix formats accepted:
    - ghp_, gho_, ghu_, ghs_, ghr_: prefixed tokens
    - github_pat_: fine-grained personal access token
    - Classic tokens: 40 character hex string (no prefix)
    """

    VALID_PREFIXES = ("ghp_", "gho_", "ghu_", "ghs_", "ghr_", "github_pat_")

    CLASSIC_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{40}$")

    def __init__(
        self,
        token: str | None = None,
        token_env: str = "GITHUB_TOKEN",
        use_gh_cli: bool = True,
        required: bool = False,
    ) -> None:
        """Initialize GitHub authentication.

        Args:
            token: GitHub token. If None, loads from ``token_env`` or the gh CLI.
            token_env: Environment variable holding the token.
            use_gh_cli: Fall back to `gh auth token` when no token is found.
            required: Raise instead of running unauthenticated.

        Raises:
            AuthenticationError: If the token is required but missing, or invalid.
        """
        loaded_token = None
        token_source = None

        if token:
            loaded_token = token
            token_source = "explicit parameter"
        elif os.environ.get(token_env):
            loaded_token = os.environ[token_env]
            token_source = f"{token_env} environment variable"
        elif use_gh_cli:
            loaded_token = _get_gh_cli_token()

        if not loaded_token:
            if required:
                raise AuthenticationError(
                    f"GitHub token not found. Set {token_env}, pass a token explicitly, "
                    "or authenticate with `gh auth login`."
                )
            logger.info("No GitHub token found, sending requests unauthenticated")
            self._token = ""
            return

        if token_source:
            logger.info("Using GitHub token from %s", token_source)

        self._token = loaded_token
        self._validate_token()

    def _validate_token(self) -> None:
        """Validate token format.

        Raises:
            AuthenticationError: If token format is invalid.
        """
        token = self._token
        has_valid_prefix = any(token.startswith(prefix) for prefix in self.VALID_PREFIXES)
        is_classic = bool(self.CLASSIC_TOKEN_PATTERN.match(token))

        if not has_valid_prefix and not is_classic:
            raise AuthenticationError(
                f"Invalid token format. Expected prefix {self.VALID_PREFIXES} "
                "or 40-character hex string (classic token)"
            )

        if has_valid_prefix and len(token) < 20:
            raise AuthenticationError("Token appears too short to be valid")

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def get_auth_header_value(self) -> str:
        if not self._token:
            return ""
        return f"token {self._token}"


class BasicAuth:
    """Username plus token, sent as HTTP Basic credentials."""

    def __init__(self, username: str, token: str) -> None:
        if not username or not token:
            raise AuthenticationError("Basic authentication needs both a username and a token")
        self._username = username
        self._token = token

    def get_auth_header_value(self) -> str:
        raw = f"{self._username}:{self._token}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"


class AnonymousAuth:
    """Credential provider for unauthenticated access."""

    def get_auth_header_value(self) -> str:
        return ""
