"""
Credential Manager - DB2 credentials stored in the system keyring
"""

import keyring
from keyring.errors import KeyringError, PasswordDeleteError
import logging

logger = logging.getLogger(__name__)


class CredentialManager:
    """
    Stores DB2 user profiles and passwords in the system's credential store.

    - Windows: Windows Credential Manager
    - macOS: Keychain
    - Linux: Secret Service (freedesktop.org)

    Connection configurations only carry a connection_id; the connector
    fills missing credentials from here.
    """

    SERVICE_NAME = "dataforge-db2"

    @staticmethod
    def _key(connection_id: str, field: str) -> str:
        return f"db2:{connection_id}:{field}"

    @staticmethod
    def save_credentials(connection_id: str, username: str, password: str) -> bool:
        """
        Save a user profile and password.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager._key(connection_id, "username"),
                username
            )
            keyring.set_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager._key(connection_id, "password"),
                password
            )
            logger.info(f"Credentials saved for DB2 connection {connection_id}")
            return True
        except KeyringError as e:
            logger.error(f"Failed to save credentials: {e}")
            return False

    @staticmethod
    def get_credentials(connection_id: str) -> tuple[str, str]:
        """
        Retrieve a user profile and password.

        Returns:
            Tuple of (username, password). Returns ("", "") if not found.
        """
        try:
            username = keyring.get_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager._key(connection_id, "username")
            )
            password = keyring.get_password(
                CredentialManager.SERVICE_NAME,
                CredentialManager._key(connection_id, "password")
            )
            return (username or "", password or "")
        except KeyringError as e:
            logger.error(f"Failed to retrieve credentials: {e}")
            return ("", "")

    @staticmethod
    def delete_credentials(connection_id: str) -> bool:
        """
        Delete stored credentials.

        Returns:
            True if deleted (or already absent), False on keyring failure
        """
        try:
            for field in ("username", "password"):
                try:
                    keyring.delete_password(
                        CredentialManager.SERVICE_NAME,
                        CredentialManager._key(connection_id, field)
                    )
                except PasswordDeleteError:
                    pass  # Already deleted or never stored
            logger.info(f"Credentials deleted for DB2 connection {connection_id}")
            return True
        except KeyringError as e:
            logger.error(f"Failed to delete credentials: {e}")
            return False
