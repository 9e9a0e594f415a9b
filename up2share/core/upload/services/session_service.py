"""
Upload session negotiation.

Asks the service for a resumable upload URI before any byte is sent.
"""
from typing import Tuple
import logging

from ..location import extract_upload_key
from ..models import DEFAULT_CONTENT_TYPE
from ..protocols import TransportProtocol
from ...exceptions import InitiationError, MalformedLocationError, TransportError


class SessionNegotiator:
    """
    Negotiates the resumable upload URI and key.

    Negotiation failures are fatal: nothing here is retried.
    """

    PATH = '/files#resumable'
    CREATED = 201

    def __init__(self, transport: TransportProtocol):
        """
        Initialize negotiator.

        Args:
            transport: Authenticated API transport
        """
        self._transport = transport
        self._logger = logging.getLogger('up2share.upload.session')

    async def initiate(
        self,
        filename: str,
        total_size: int,
        content_type: str = DEFAULT_CONTENT_TYPE
    ) -> Tuple[str, str]:
        """
        Start a resumable upload.

        Args:
            filename: Name the file will have on the service
            total_size: Total bytes that will be sent
            content_type: MIME type of the file

        Returns:
            Tuple of (upload URI, upload key)

        Raises:
            InitiationError: On any non-201 status, missing or malformed
                Location, or transport failure
        """
        headers = {
            'Content-Type': content_type,
            'X-Upload-Content-Length': str(total_size),
            'X-Upload-Content-Type': content_type,
        }

        try:
            response = await self._transport.request(
                'POST',
                self.PATH,
                json={'filename': filename},
                headers=headers
            )
        except TransportError as e:
            self._logger.error(f"Error starting upload: {e}")
            raise InitiationError(f"Failed to initiate upload: {e}") from e

        if response.status != self.CREATED:
            self._logger.error(f"Error starting upload: HTTP {response.status}")
            raise InitiationError(
                f"Failed to initiate upload: {response.status}",
                status=response.status
            )

        upload_uri = response.location
        try:
            upload_key = extract_upload_key(upload_uri, self._transport.base_url)
        except MalformedLocationError as e:
            self._logger.error(f"Error starting upload: {e}")
            raise InitiationError(
                f"Failed to initiate upload: {e}",
                status=response.status
            ) from e

        self._logger.info(f"Upload initiated for {filename}: key={upload_key}")
        return upload_uri, upload_key
