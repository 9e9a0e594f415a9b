"""
Create, list and delete shares
"""
import asyncio
from datetime import datetime, timedelta, timezone
from up2share import Up2ShareClient


async def main():
    async with Up2ShareClient("my-api-key") as client:

        # Upload and share in one step
        share = await client.upload_and_share(
            "report.pdf",
            password="secret",
            expires_at=datetime.now(timezone.utc) + timedelta(days=7)
        )
        print(f"Share: {share}")

        # Share an existing file
        file_info = await client.get_file(12345)
        print(f"File: {file_info}")
        share = await client.create_share(12345)

        # Newest shares first
        page = await client.list_shares(page=1)
        for item in page.get('data', []):
            print(f"  {item.get('id')}: {item.get('url')}")

        # Remove it again
        share_id = share.get('data', share).get('id')
        await client.delete_share(share_id)
        print(f"Deleted share {share_id}")


if __name__ == "__main__":
    asyncio.run(main())
