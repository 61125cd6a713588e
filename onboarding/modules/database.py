from databases import Database
from onboarding.modules.settings import DATABASE_URL

# Create the database instance
database = Database(DATABASE_URL)

async def connect_to_db():
    await database.connect()

async def disconnect_from_db():
    await database.disconnect()
