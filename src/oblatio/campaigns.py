"""
Charity campaign operations.

Typed wrappers over the ``CharityPlatform`` contract, plus a lazy view of
all campaigns.  Campaign ids are sequential and start at 1.
"""

from __future__ import annotations

from typing import Iterator

from .errors import InvalidAmount, QueryFailed
from .gateway import ContractGateway
from .models import Campaign, TransactionIntent

CONTRACT_NAME = "CharityPlatform"

CREATE_CAMPAIGN = "createCampaign"
DONATE = "donateToCampaign"
CAMPAIGN_COUNT = "campaignCount"
GET_CAMPAIGN = "getCampaign"


def create_campaign(
    gateway: ContractGateway,
    title: str,
    description: str,
    target_amount: int,
) -> TransactionIntent:
    """Submit ``createCampaign``.  ``target_amount`` is in wei."""
    if isinstance(target_amount, bool) or not isinstance(target_amount, int) or target_amount < 0:
        raise InvalidAmount(f"Target amount must be a non-negative integer, got {target_amount!r}")
    return gateway.write(CREATE_CAMPAIGN, (title, description, target_amount))


def campaign_count(gateway: ContractGateway) -> int:
    values = gateway.query(CAMPAIGN_COUNT)
    try:
        (count,) = values
        return int(count)
    except (TypeError, ValueError) as exc:
        raise QueryFailed(f"{CAMPAIGN_COUNT} returned an unexpected shape: {values!r}") from exc


def get_campaign(gateway: ContractGateway, campaign_id: int) -> Campaign:
    fields = gateway.query_fields(GET_CAMPAIGN, (campaign_id,))
    try:
        return Campaign.from_fields(fields)
    except (KeyError, TypeError, ValueError) as exc:
        raise QueryFailed(f"{GET_CAMPAIGN}({campaign_id}) returned an unexpected shape: {exc!r}") from exc


def donate(gateway: ContractGateway, campaign_id: int, amount: int) -> TransactionIntent:
    """Submit ``donateToCampaign`` with ``amount`` wei attached."""
    if isinstance(campaign_id, bool) or not isinstance(campaign_id, int) or campaign_id < 1:
        raise InvalidAmount(f"Campaign ID must be a positive integer, got {campaign_id!r}")
    return gateway.write(DONATE, (campaign_id,), value=amount)


class CampaignSequence:
    """
    All campaigns, fetched one at a time.

    Each iteration starts over: it reads the current count and then
    queries ids ``1..count``.  Nothing is fetched until iteration begins,
    and only one campaign is held at a time, so a paginated or bulk
    backend can replace the per-id queries without touching callers.
    """

    def __init__(self, gateway: ContractGateway) -> None:
        self.gateway = gateway

    def count(self) -> int:
        return campaign_count(self.gateway)

    def __iter__(self) -> Iterator[Campaign]:
        total = self.count()
        for campaign_id in range(1, total + 1):
            yield get_campaign(self.gateway, campaign_id)
