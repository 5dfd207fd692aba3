import re
from typing import List, Optional

from models.promo_code import PromoCode
from utils.exceptions import DuplicateError, NotFoundError
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)


def _code_query(code: str) -> dict:
    # case-insensitive exact match
    return {"code": {"$regex": f"^{re.escape(code.strip())}$", "$options": "i"}}


class PromoCodeRepository:
    def __init__(self, db):
        self.collection = db["promo_codes"]

    async def list_codes(self) -> List[PromoCode]:
        docs = await self.collection.find({}, {"_id": 0}).to_list(length=None)
        return [PromoCode(**doc) for doc in docs]

    async def find(self, code: str) -> Optional[PromoCode]:
        if not code or not code.strip():
            return None
        doc = await self.collection.find_one(_code_query(code), {"_id": 0})
        return PromoCode(**doc) if doc else None

    async def add(self, promo: PromoCode) -> PromoCode:
        if await self.find(promo.code):
            raise DuplicateError(f"Promo code {promo.code} already exists.")
        promo = promo.model_copy(update={"code": promo.code.strip().upper()})
        await self.collection.insert_one(promo.model_dump())
        logger.info("Added promo code %s", promo.code)
        return promo

    async def delete(self, code: str):
        result = await self.collection.delete_one(_code_query(code))
        if result.deleted_count == 0:
            raise NotFoundError(f"Promo code {code} not found.")
        logger.info("Deleted promo code %s", code)
