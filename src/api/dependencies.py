from datetime import timedelta

from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.donation_repository import MongoDonationRepository
from adapter.mongodb.opportunity_repository import MongoOpportunityRepository
from adapter.mongodb.signup_repository import MongoSignupRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.donation_repository import DonationRepository
from port.opportunity_repository import OpportunityRepository
from port.signup_repository import SignupRepository
from port.user_repository import UserRepository
from services.token_service import TokenService
from utils.config import Settings, get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    settings = get_settings()
    client = get_mongodb_client(settings)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[settings.database_name]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_donation_repo() -> DonationRepository:
    return MongoDonationRepository(_get_db())


def get_opportunity_repo() -> OpportunityRepository:
    return MongoOpportunityRepository(_get_db())


def get_signup_repo() -> SignupRepository:
    return MongoSignupRepository(_get_db())


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )
