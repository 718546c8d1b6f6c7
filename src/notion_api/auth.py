"""Authentication module for loading the Notion integration token.

The token is read from the NOTION_API_KEY environment variable; a .env file
in the working directory is loaded first via python-dotenv.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import MissingCredentialsError

API_KEY_VARIABLE = 'NOTION_API_KEY'


class Credentials(NamedTuple):
    """Notion API credentials."""
    api_key: str


class Authenticator:
    """Loads the Notion integration token from the environment.

    Credentials are never cached or logged.

    Required environment variables:
        NOTION_API_KEY: Internal integration secret

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
    """

    def __init__(self):
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get the Notion token from the environment.

        Returns:
            Credentials: Named tuple containing api_key

        Raises:
            MissingCredentialsError: If NOTION_API_KEY is unset or empty
        """
        api_key = os.getenv(API_KEY_VARIABLE)
        if not api_key:
            raise MissingCredentialsError(API_KEY_VARIABLE)
        return Credentials(api_key=api_key)
