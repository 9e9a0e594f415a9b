"""
Advanced usage - Config, retries, direct coordinator
"""
import asyncio
import logging
from up2share import (
    Up2ShareClient,
    UploadCoordinator,
    ChunkUploadError,
    UploadError,
    setup_logging
)


async def main():
    setup_logging(logging.DEBUG)

    # Custom configuration
    config = Up2ShareClient.create_config(
        proxy="http://proxy.example.com:8080",
        timeout=300,
        max_retries=8,
        retry_delay=1.0  # exponential backoff starting at 1s
    )

    async with Up2ShareClient("my-api-key", config=config) as client:
        coordinator: UploadCoordinator = client.create_uploader(chunk_size=20 * 1024 * 1024)

        try:
            result = await coordinator.upload("backup.tar")
            print(f"Uploaded: {result.file_id}")
        except ChunkUploadError as e:
            print(f"Chunk {e.chunk_start}-{e.chunk_end} failed after {e.attempts} attempts")
        except UploadError as e:
            print(f"Upload failed in state {coordinator.state.value}: {e}")


if __name__ == "__main__":
    asyncio.run(main())
