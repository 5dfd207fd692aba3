import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from auth.password_handler import hash_password
from models.agency import Agent, AgentProfile, AgentProfileCreate
from models.invoice import Invoice
from utils.exceptions import AgencyNotFoundError, DuplicateError, ValidationError
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

AGENT_PROJECTION = {"_id": 0, "password_hash": 0}


class WalletLedger:
    """
    Agency wallet balances and their invoices.

    Every balance change goes through ``update_agent_wallet``, which writes
    exactly one invoice per change. Balances are not floored at zero here;
    callers check for sufficient funds before debiting.
    """

    def __init__(self, db):
        self.agencies = db["agencies"]
        self.invoices = db["invoices"]

    async def update_agent_wallet(self, agent_id: str, amount: float, type: str, description: str) -> Invoice:
        if type not in ("Credit", "Debit"):
            raise ValidationError(f"Unknown transaction type '{type}'.")
        delta = amount if type == "Credit" else -amount

        doc = await self.agencies.find_one_and_update(
            {"id": agent_id},
            {"$inc": {"wallet_balance": delta}},
            projection=AGENT_PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise AgencyNotFoundError(f"Agency {agent_id} not found.")
        agent = Agent(**doc)

        invoice = Invoice(
            id=f"INV-{uuid.uuid4().hex[:12].upper()}",
            agent_id=agent.id,
            agent_name=agent.profile.agency_name,
            amount=amount,
            type=type,
            description=description,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.invoices.insert_one(invoice.model_dump(mode="json"))
        except PyMongoError:
            # undo the balance change so there is never a balance change without its invoice
            await self.agencies.update_one({"id": agent_id}, {"$inc": {"wallet_balance": -delta}})
            logger.exception("Invoice write failed for %s, balance change reverted", agent_id)
            raise

        logger.info("%s %s %.2f (%s); balance now %.2f", type, agent_id, amount, description, agent.wallet_balance)
        return invoice

    async def list_invoices(self, agent_id: Optional[str] = None) -> List[Invoice]:
        query = {"agent_id": agent_id} if agent_id else {}
        docs = await self.invoices.find(query, {"_id": 0}).sort("created_at", -1).to_list(length=None)
        return [Invoice(**doc) for doc in docs]


class AgencyService:
    def __init__(self, db, ledger: WalletLedger):
        self.collection = db["agencies"]
        self.ledger = ledger

    async def list_agencies(self) -> List[Agent]:
        docs = await self.collection.find({}, AGENT_PROJECTION).to_list(length=None)
        return [Agent(**doc) for doc in docs]

    async def find_agency(self, agent_id: str) -> Optional[Agent]:
        doc = await self.collection.find_one({"id": agent_id}, AGENT_PROJECTION)
        return Agent(**doc) if doc else None

    async def get_agency(self, agent_id: str) -> Agent:
        agent = await self.find_agency(agent_id)
        if not agent:
            raise AgencyNotFoundError(f"Agency {agent_id} not found.")
        return agent

    async def get_password_hash(self, agent_id: str) -> Optional[str]:
        doc = await self.collection.find_one({"id": agent_id}, {"_id": 0, "password_hash": 1})
        return doc.get("password_hash") if doc else None

    async def add_agency(self, profile: AgentProfileCreate) -> Agent:
        agency_id = profile.agency_id.strip()
        if not agency_id:
            raise ValidationError("Agency ID is required.")
        if await self.find_agency(agency_id):
            raise DuplicateError(f"Agency with ID {agency_id} already exists.")

        agent = Agent(
            id=agency_id,
            profile=AgentProfile(**profile.model_dump(exclude={"password", "agency_id"}), agency_id=agency_id),
            status="Active",
            wallet_balance=0,
        )
        doc = agent.model_dump(mode="json")
        doc["password_hash"] = hash_password(profile.password) if profile.password else None
        await self.collection.insert_one(doc)
        logger.info("Added agency %s (%s)", agency_id, agent.profile.agency_name)
        return agent

    async def update_profile(self, agent_id: str, profile: AgentProfileCreate) -> Agent:
        """Profile edits never move the wallet balance or the agency id."""
        update = {"profile": AgentProfile(**profile.model_dump(exclude={"password", "agency_id"}),
                                          agency_id=agent_id).model_dump(mode="json")}
        if profile.password:
            update["password_hash"] = hash_password(profile.password)
        doc = await self.collection.find_one_and_update(
            {"id": agent_id},
            {"$set": update},
            projection=AGENT_PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise AgencyNotFoundError(f"Agency {agent_id} not found.")
        logger.info("Updated agency profile %s", agent_id)
        return Agent(**doc)

    async def update_agent_status(self, agent_id: str, status: str) -> Agent:
        doc = await self.collection.find_one_and_update(
            {"id": agent_id},
            {"$set": {"status": status}},
            projection=AGENT_PROJECTION,
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise AgencyNotFoundError(f"Agency {agent_id} not found.")
        logger.info("Agency %s is now %s", agent_id, status)
        return Agent(**doc)

    async def wallet_transaction(self, agent_id: str, amount: float, type: str, description: str) -> Invoice:
        """Admin wallet adjustment, validated before it reaches the ledger."""
        agent = await self.get_agency(agent_id)
        if amount <= 0 or not description.strip():
            raise ValidationError("Please enter a valid amount and description.")
        if type == "Debit" and amount > agent.wallet_balance:
            raise ValidationError("Debit amount cannot exceed current wallet balance.")
        return await self.ledger.update_agent_wallet(agent_id, amount, type, description.strip())
