from motor.motor_asyncio import AsyncIOMotorCollection

from app.models import OrderDB

class OrderRepository:
    """Write-only access to the orders collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def ensure_indexes(self):
        await self.collection.create_index("orderId", unique=True)
        # Mongo drops the document once expirationTime has passed
        await self.collection.create_index("expirationTime", expireAfterSeconds=0)

    async def put(self, order: OrderDB) -> None:
        await self.collection.insert_one(order.model_dump(by_alias=True))

    async def ping(self) -> bool:
        await self.collection.database.command("ping")
        return True
