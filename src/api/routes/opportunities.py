"""Volunteer opportunity routes (read-only)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_opportunity_repo
from api.models import OpportunityResponse
from domain.model.errors import StorageError
from port.opportunity_repository import OpportunityRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/opportunities", tags=["opportunities"])


@router.get("", response_model=list[OpportunityResponse])
def list_opportunities(repo: OpportunityRepository = Depends(get_opportunity_repo)):
    """Get all volunteer opportunities, newest first."""
    try:
        opportunities = repo.find_all()
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server Error")

    logger.debug("Opportunities listed", extra={"count": len(opportunities)})

    return [
        OpportunityResponse(
            id=o.id,
            title=o.title,
            description=o.description,
            location=o.location,
            duration=o.duration,
            volunteers_needed=o.volunteers_needed,
            date_created=o.date_created,
        )
        for o in opportunities
    ]
