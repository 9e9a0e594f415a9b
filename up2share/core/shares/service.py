"""
File and share services.

Plain request/response calls against /files and /shares.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
import logging

from ..api.response import ApiResponse
from ..exceptions import APIRequestError, ShareValidationError, Up2ShareException
from ..upload.notifications import (
    NotificationChannel,
    ShareCreatedNotification,
    ErrorNotification
)
from ..upload.protocols import TransportProtocol


def _check_status(response: ApiResponse, expected, what: str) -> Any:
    if response.status not in expected:
        body = None
        try:
            body = response.json()
        except ValueError:
            body = response.text()
        raise APIRequestError(
            f"Failed to {what}: {response.status}",
            status=response.status,
            body=body
        )
    try:
        return response.json()
    except ValueError as e:
        raise APIRequestError(
            f"Failed to {what}: invalid JSON response",
            status=response.status,
            body=response.text()
        ) from e


class FileService:
    """Reads file details (public and download URLs)."""

    def __init__(self, api_client: TransportProtocol):
        self._api = api_client
        self._logger = logging.getLogger('up2share.files')

    async def get_file(self, file_id: Union[int, str]) -> Dict[str, Any]:
        """
        Get file details by id.

        Raises:
            APIRequestError: If the response is not 200
        """
        response = await self._api.request('GET', f'/files/{file_id}')
        data = _check_status(response, (200,), "retrieve file details")
        self._logger.info(f"File details retrieved for file ID: {file_id}")
        return data


class ShareService:
    """
    Creates, lists, reads and deletes shares.

    Publishes ShareCreatedNotification and ErrorNotification when a
    channel is given.
    """

    LIST_PARAMS = {'include': 'file', 'orderBy': 'id', 'sortedBy': 'desc'}

    def __init__(
        self,
        api_client: TransportProtocol,
        notifications: Optional[NotificationChannel] = None
    ):
        self._api = api_client
        self._notifications = notifications
        self._logger = logging.getLogger('up2share.shares')

    @staticmethod
    def validate_expires_at(expires_at: Union[str, datetime]) -> str:
        """
        Check an expiration date lies in the future.

        Args:
            expires_at: datetime or ISO 8601 string (naive values are UTC)

        Returns:
            ISO 8601 string sent to the API

        Raises:
            ShareValidationError: If unparsable or not in the future
        """
        if isinstance(expires_at, str):
            try:
                parsed = datetime.fromisoformat(expires_at.replace('Z', '+00:00'))
            except ValueError as e:
                raise ShareValidationError(f"Invalid expiration date: {expires_at}") from e
        else:
            parsed = expires_at

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)

        if parsed <= datetime.now(timezone.utc):
            raise ShareValidationError("Expiration date must be greater than the current date")

        return parsed.isoformat()

    async def list_shares(self, page: int = 1) -> Dict[str, Any]:
        """List shares, newest first, with their files included."""
        if page < 1:
            raise ShareValidationError("Page must be >= 1")
        params = {'page': page, **self.LIST_PARAMS}
        response = await self._api.request('GET', '/shares', params=params)
        return _check_status(response, (200,), "fetch shares")

    async def create_share(
        self,
        file_id: Union[int, str],
        target_id: Optional[Union[int, str]] = None,
        password: Optional[str] = None,
        expires_at: Optional[Union[str, datetime]] = None
    ) -> Dict[str, Any]:
        """
        Create a share for an uploaded file.

        Raises:
            ShareValidationError: If expires_at is not in the future
            APIRequestError: If the response is not 201
        """
        try:
            expires = self.validate_expires_at(expires_at) if expires_at else None
        except ShareValidationError as e:
            self._logger.error(f"Invalid expiration date: {e}")
            self._emit_error(e)
            raise

        body = {
            'file_id': file_id,
            'target_id': target_id,
            'password': password,
            'expires_at': expires,
        }

        try:
            response = await self._api.request('POST', '/shares', json=body)
            share = _check_status(response, (201,), "create share")
        except Up2ShareException as e:
            self._logger.error(f"Error creating share: {e}")
            self._emit_error(e)
            raise

        self._logger.info(f"Share created successfully for file ID: {file_id}")
        if self._notifications:
            self._notifications.emit(ShareCreatedNotification(share=share))
        return share

    async def get_share(self, share_id: Union[int, str]) -> Dict[str, Any]:
        response = await self._api.request('GET', f'/shares/{share_id}')
        return _check_status(response, (200,), "retrieve share")

    async def delete_share(self, share_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        """Delete a share; returns the confirmation body if the API sends one."""
        response = await self._api.request('DELETE', f'/shares/{share_id}')
        data = _check_status(response, (200, 204), "delete share")
        self._logger.info(f"Share deleted successfully for share ID: {share_id}")
        return data

    def _emit_error(self, error: Exception) -> None:
        if self._notifications:
            self._notifications.emit(ErrorNotification(message=str(error)))
