"""
Upload files to up2sha.re
"""
import asyncio
from up2share import Up2ShareClient, ProgressNotification, ErrorNotification


async def main():
    # API key read from ~/.config/up2share/app_config.json
    async with Up2ShareClient() as client:

        # Simple upload
        result = await client.upload("document.pdf")
        print(f"Uploaded: {result.filename} (ID: {result.file_id})")

        # Upload with custom name and content type
        result = await client.upload("photo.jpg", name="vacation_2024.jpg", content_type="image/jpeg")
        print(f"Uploaded as: {result.filename}")

        # Upload with progress callback
        def on_progress(progress):
            print(f"Progress: {progress.percentage:.1f}% ({progress.uploaded_chunks}/{progress.total_chunks})")

        result = await client.upload("large_file.zip", progress_callback=on_progress)
        print(f"Uploaded: {result.file_id}")

        # Notifications: subscribe before uploading
        client.on(ProgressNotification, lambda n: print(f"bytes {n.chunk_start}-{n.chunk_end}: {n.progress:.1f}%"))
        client.on(ErrorNotification, lambda n: print(f"Error: {n.message}"))

        # 5 MiB chunks
        result = await client.upload("video.mp4", chunk_size=5 * 1024 * 1024)
        print(f"Uploaded video: {result.file_id}")


if __name__ == "__main__":
    asyncio.run(main())
