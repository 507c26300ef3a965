import asyncio

from mockshare.auth.security import create_access_token
from mockshare.comments.schemas import CommentCreate
from mockshare.comments.service import CommentLedger
from mockshare.database import AsyncSessionLocal, engine, Base
from mockshare.mockups.schemas import MockupCreate
from mockshare.mockups.service import MockupService
from mockshare.versions.coordinator import VersioningCoordinator

DEMO_CONTENT = {
    "brand": "Mainstays",
    "title": "Mainstays 12-Cup Programmable Coffee Maker, Black",
    "price": "24.97",
    "rating": 4.3,
    "reviewCount": 1287,
    "description": "Wake up to fresh coffee with a 24-hour programmable timer.",
    "bullets": [
        "12-cup glass carafe",
        "Pause and serve",
        "Auto shut-off after 2 hours",
    ],
    "images": [],
}


async def seed_data():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        mockup = await MockupService(session).create_mockup(MockupCreate(content=DEMO_CONTENT))
        print(f"Created mockup {mockup.id}")

        ledger = CommentLedger(session)
        await ledger.add_comment(
            mockup.id,
            CommentCreate(
                x=0.42, y=0.18, width=0.2, height=0.1,
                body="Can the hero shot show the carafe?",
                author_name="Client",
                author_token="seed-client-token",
            ),
        )

        cut = await VersioningCoordinator(session).cut_version(mockup.id)
        print(f"Archived version {cut.previous_version}, now on version {cut.new_version}")

    token = create_access_token(data={"sub": "designer@mockshare.local"})
    print(f"Designer token: {token}")

if __name__ == "__main__":
    asyncio.run(seed_data())
