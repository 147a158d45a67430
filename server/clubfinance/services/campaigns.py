from __future__ import annotations

import logging
from typing import Iterable

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from clubfinance.models.campaign import Campaign, Contribution
from clubfinance.models.dues import PAYMENT_PENDING, PAYMENT_VALIDATED
from clubfinance.models.member import Member
from clubfinance.schemas.campaign import CampaignIn, CampaignOut, ContributionCreate, ContributionOut
from clubfinance.services.aggregation import campaign_progress, campaign_raised
from clubfinance.services.audit import ACTION_CAMPAIGN, record_audit
from clubfinance.services.gateway import commit

logger = logging.getLogger(__name__)


def get_campaign(db: Session, campaign_id: int) -> Campaign:
    campaign = db.get(Campaign, campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found")
    return campaign


def _apply(campaign: Campaign, payload: CampaignIn) -> None:
    campaign.name = payload.name
    campaign.description = payload.description
    campaign.goal = payload.goal
    campaign.start_date = payload.start_date
    campaign.end_date = payload.end_date
    campaign.status = payload.status


def create_campaign(db: Session, payload: CampaignIn, actor: Member) -> Campaign:
    campaign = Campaign()
    _apply(campaign, payload)
    db.add(campaign)
    record_audit(db, actor, ACTION_CAMPAIGN, f'Campaign "{campaign.name}" created.')
    commit(db)
    db.refresh(campaign)
    return campaign


def update_campaign(db: Session, campaign_id: int, payload: CampaignIn, actor: Member) -> Campaign:
    campaign = get_campaign(db, campaign_id)
    _apply(campaign, payload)
    db.add(campaign)
    record_audit(db, actor, ACTION_CAMPAIGN, f'Campaign "{campaign.name}" updated.')
    commit(db)
    db.refresh(campaign)
    return campaign


def add_contribution(db: Session, campaign_id: int, payload: ContributionCreate, actor: Member) -> Contribution:
    campaign = get_campaign(db, campaign_id)
    if actor.is_treasurer:
        if payload.member_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Select a member for the contribution.")
        member = db.get(Member, payload.member_id)
        if not member:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Member not found")
        contribution_status = PAYMENT_VALIDATED
    else:
        if payload.member_id is not None and payload.member_id != actor.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Members can only record their own contributions")
        member = actor
        contribution_status = PAYMENT_PENDING

    contribution = Contribution(
        campaign_id=campaign.id,
        member_id=member.id,
        amount=payload.amount,
        date=payload.date,
        status=contribution_status,
        proof=payload.proof,
    )
    db.add(contribution)
    commit(db)
    db.refresh(contribution)
    logger.info(
        "contribution_recorded",
        extra={"campaign_id": campaign.id, "contribution_id": contribution.id, "status": contribution_status},
    )
    return contribution


def update_contribution_status(db: Session, contribution_id: int, new_status: str) -> Contribution:
    contribution = db.get(Contribution, contribution_id)
    if not contribution:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contribution not found")
    if contribution.status != PAYMENT_PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only pending contributions can be reviewed")
    if new_status == PAYMENT_PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status must be validated or rejected")
    contribution.status = new_status
    db.add(contribution)
    commit(db)
    db.refresh(contribution)
    return contribution


def with_progress(campaigns: Iterable[CampaignOut], contributions: list[ContributionOut]) -> list[CampaignOut]:
    items: list[CampaignOut] = []
    for campaign in campaigns:
        raised = campaign_raised(contributions, campaign.id)
        items.append(
            campaign.model_copy(update={"raised": raised, "progress": campaign_progress(raised, campaign.goal)})
        )
    return items
