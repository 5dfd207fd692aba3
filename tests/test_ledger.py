import pytest

from models.agency import AgentProfileCreate
from utils.exceptions import AgencyNotFoundError, DuplicateError, ValidationError


async def balance(services, agent_id):
    return (await services["agencies"].get_agency(agent_id)).wallet_balance


class TestWalletLedger:

    @pytest.mark.asyncio
    async def test_credit_writes_one_invoice(self, services):
        invoice = await services["ledger"].update_agent_wallet("NT-002", 50000, "Credit", "Top-up")
        assert invoice.id.startswith("INV-")
        assert invoice.agent_name == "Noor Tours"
        assert await balance(services, "NT-002") == 7050000
        assert len(await services["ledger"].list_invoices("NT-002")) == 1

    @pytest.mark.asyncio
    async def test_debit_lowers_balance(self, services):
        await services["ledger"].update_agent_wallet("NT-002", 2000000, "Debit", "Adjustment")
        assert await balance(services, "NT-002") == 5000000
        invoices = await services["ledger"].list_invoices()
        assert [(i.type, i.amount) for i in invoices] == [("Debit", 2000000)]

    @pytest.mark.asyncio
    async def test_unknown_agency_leaves_no_invoice(self, services):
        with pytest.raises(AgencyNotFoundError):
            await services["ledger"].update_agent_wallet("XX-999", 10, "Credit", "Top-up")
        assert await services["ledger"].list_invoices() == []


class TestAgencyService:

    @pytest.mark.asyncio
    async def test_debit_cannot_exceed_balance(self, services):
        with pytest.raises(ValidationError, match="cannot exceed"):
            await services["agencies"].wallet_transaction("NT-002", 7000001, "Debit", "Too much")
        assert await balance(services, "NT-002") == 7000000
        assert await services["ledger"].list_invoices() == []

    @pytest.mark.asyncio
    async def test_blank_description_is_rejected(self, services):
        with pytest.raises(ValidationError):
            await services["agencies"].wallet_transaction("NT-002", 100, "Credit", "   ")

    @pytest.mark.asyncio
    async def test_add_agency_starts_empty(self, services):
        profile = AgentProfileCreate(
            agency_name="Safa Travels",
            agency_id="SFA-004",
            contact_email="ops@safa.example.com",
            password="s3cret",
        )
        agent = await services["agencies"].add_agency(profile)
        assert agent.status == "Active"
        assert agent.wallet_balance == 0
        assert await services["agencies"].get_password_hash("SFA-004")

        with pytest.raises(DuplicateError):
            await services["agencies"].add_agency(profile)

    @pytest.mark.asyncio
    async def test_profile_update_keeps_balance(self, services):
        profile = AgentProfileCreate(
            agency_name="Noor Tours & Travel",
            agency_id="ignored",
            contact_email="contact@noortours.com",
        )
        agent = await services["agencies"].update_profile("NT-002", profile)
        assert agent.profile.agency_name == "Noor Tours & Travel"
        assert agent.profile.agency_id == "NT-002"
        assert agent.wallet_balance == 7000000
