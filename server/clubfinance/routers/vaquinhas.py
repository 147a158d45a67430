from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member, require_treasurer
from clubfinance.core.db import get_db
from clubfinance.models.campaign import Campaign
from clubfinance.models.member import Member
from clubfinance.schemas.campaign import CampaignIn, CampaignOut, ContributionCreate, ContributionOut
from clubfinance.schemas.common import StatusUpdate
from clubfinance.services import campaigns as campaigns_service
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/vaquinhas", tags=["vaquinhas"])


def _campaign_out(store: FinanceStore, campaign: Campaign) -> CampaignOut:
    item = CampaignOut.model_validate(campaign)
    return campaigns_service.with_progress([item], store.snapshot.contributions)[0]


@router.get("", response_model=list[CampaignOut])
def list_campaigns(
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> list[CampaignOut]:
    snapshot = store.refresh(db)
    return campaigns_service.with_progress(snapshot.campaigns, snapshot.contributions)


@router.post("", response_model=CampaignOut, status_code=status.HTTP_201_CREATED)
def create_campaign(
    payload: CampaignIn,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> CampaignOut:
    campaign = campaigns_service.create_campaign(db, payload, treasurer)
    store.refresh(db)
    return _campaign_out(store, campaign)


@router.put("/{campaign_id}", response_model=CampaignOut)
def update_campaign(
    campaign_id: int,
    payload: CampaignIn,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> CampaignOut:
    campaign = campaigns_service.update_campaign(db, campaign_id, payload, treasurer)
    store.refresh(db)
    return _campaign_out(store, campaign)


@router.get("/{campaign_id}/contributions", response_model=list[ContributionOut])
def list_contributions(
    campaign_id: int,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> list[ContributionOut]:
    campaigns_service.get_campaign(db, campaign_id)
    return [item for item in store.refresh(db).contributions if item.campaign_id == campaign_id]


@router.post(
    "/{campaign_id}/contributions",
    response_model=ContributionOut,
    status_code=status.HTTP_201_CREATED,
)
def add_contribution(
    campaign_id: int,
    payload: ContributionCreate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    member: Member = Depends(get_current_member),
) -> ContributionOut:
    contribution = campaigns_service.add_contribution(db, campaign_id, payload, member)
    store.refresh(db)
    return ContributionOut.model_validate(contribution)


@router.post("/contributions/{contribution_id}/status", response_model=ContributionOut)
def update_contribution_status(
    contribution_id: int,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> ContributionOut:
    contribution = campaigns_service.update_contribution_status(db, contribution_id, payload.status)
    store.refresh(db)
    return ContributionOut.model_validate(contribution)
