from fastapi import APIRouter, HTTPException, Request, Depends
from datetime import datetime, timezone

from auth.dependencies import get_current_customer, get_token_payload
from auth.jwt_handler import create_access_token
from auth.password_handler import hash_password, verify_password, verify_admin_credentials
from database.connection import insert_with_next_id
from models.user import (
    AdminLogin,
    AgentLogin,
    CustomerCreate,
    CustomerLogin,
    CustomerResponse,
    LogoutResponse,
    TokenResponse,
)
from utils.logging_utils import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

LOGOUT_REDIRECTS = {
    "admin": "/admin/login",
    "agent": "/agent/login",
    "customer": "/login",
}


@router.post("/register", response_model=CustomerResponse, status_code=201)
async def register_customer(customer: CustomerCreate, request: Request):
    customers = request.app.mongodb["customers"]
    existing = await customers.find_one({"email": customer.email.lower()})
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    password_hash = hash_password(customer.password)
    customer_doc = await insert_with_next_id(customers, lambda new_id: {
        "id": new_id,
        "name": customer.name,
        "email": customer.email.lower(),
        "password": password_hash,
        "created_at": datetime.now(timezone.utc),
    })
    logger.info("Registered customer %d (%s)", customer_doc["id"], customer_doc["email"])
    return CustomerResponse(**customer_doc)


@router.post("/login", response_model=TokenResponse)
async def login_customer(credentials: CustomerLogin, request: Request):
    customer = await request.app.mongodb["customers"].find_one({"email": credentials.email.lower()})
    if not customer or not verify_password(credentials.password, customer.get("password")):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user_id = str(customer["id"])
    return TokenResponse(access_token=create_access_token(user_id, "customer"), role="customer", user_id=user_id)


@router.post("/agent-login", response_model=TokenResponse)
async def login_agent(credentials: AgentLogin, request: Request):
    agencies = request.app.agencies
    agent = await agencies.find_agency(credentials.agency_id.strip())
    if not agent or not verify_password(credentials.password, await agencies.get_password_hash(agent.id)):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if agent.status != "Active":
        raise HTTPException(status_code=403, detail="This agency account is inactive.")
    return TokenResponse(access_token=create_access_token(agent.id, "agent"), role="agent", user_id=agent.id)


@router.post("/admin-login", response_model=TokenResponse)
async def login_admin(credentials: AdminLogin):
    if not verify_admin_credentials(credentials.admin_id, credentials.password):
        logger.warning("Failed admin login for %s", credentials.admin_id)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return TokenResponse(
        access_token=create_access_token(credentials.admin_id, "admin"),
        role="admin",
        user_id=credentials.admin_id,
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(payload: dict = Depends(get_token_payload)):
    """Tokens are stateless; the client drops it and goes to its role's login page."""
    return LogoutResponse(
        message="Logged out",
        redirect_to=LOGOUT_REDIRECTS.get(payload["user_type"], "/login"),
    )


@router.get("/me", response_model=CustomerResponse)
async def get_current_customer_info(customer: dict = Depends(get_current_customer)):
    return CustomerResponse(**customer)
