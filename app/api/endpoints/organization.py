from fastapi import APIRouter, Depends
from app.core.config import Settings
from app.schemas.organization import OrgDetails
from app.api.deps import get_settings

router = APIRouter()


@router.get("/org-details", response_model=OrgDetails)
async def org_details(settings: Settings = Depends(get_settings)):
    """
    Organization identity shown on donation receipts.
    """
    return OrgDetails(
        name=settings.ORG_NAME,
        address=settings.ORG_ADDRESS,
        pan=settings.ORG_PAN,
        gstin=settings.ORG_GSTIN,
        registrationNumber=settings.ORG_REGISTRATION_NUMBER,
        registration80G=settings.ORG_80G_REGISTRATION,
        registration12A=settings.ORG_12A_REGISTRATION,
        email=settings.ORG_EMAIL,
        phone=settings.ORG_PHONE,
        website=settings.ORG_WEBSITE,
    )
