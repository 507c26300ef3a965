import asyncio
from mockshare.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from mockshare.mockups.models import Mockup
from mockshare.versions.models import VersionSnapshot
from mockshare.comments.models import Comment

async def init_models():
    async with engine.begin() as conn:
        # await conn.run_sync(Base.metadata.drop_all) # Optional: Reset DB
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created.")

if __name__ == "__main__":
    asyncio.run(init_models())
