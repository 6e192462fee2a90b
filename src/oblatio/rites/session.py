"""
Rite Session - Interactive charity session.

Two roles share one contract:
- deployer (administrator): create a campaign, or list all campaigns
- user (participant):       donate to a campaign

Flow:
1. Ask for the role; anything unrecognized ends the session
2. Deployer only: ask for the action (1 = create, 2 = view)
3. Run the chosen workflow once, report the outcome, end the session

The prompt is released on every way out, including errors.
"""

from __future__ import annotations

import enum
from typing import Callable, Optional

import click

from ..campaigns import CampaignSequence, create_campaign, donate
from ..errors import InvalidAmount, InvalidSelection
from ..units import format_units, to_base_units
from .common import RiteContext, perform


class Role(enum.Enum):
    ADMINISTRATOR = "deployer"
    PARTICIPANT = "user"


class Action(enum.Enum):
    CREATE_CAMPAIGN = "create-campaign"
    VIEW_CAMPAIGNS = "view-campaigns"
    DONATE = "donate"


ROLE_ALIASES: dict[str, Role] = {
    "deployer": Role.ADMINISTRATOR,
    "administrator": Role.ADMINISTRATOR,
    "user": Role.PARTICIPANT,
    "participant": Role.PARTICIPANT,
}

ADMIN_ACTIONS: dict[str, Action] = {
    "1": Action.CREATE_CAMPAIGN,
    "2": Action.VIEW_CAMPAIGNS,
}

ROLE_PROMPT = "Are you the deployer or a user? (deployer/user):"
ACTION_PROMPT = "What would you like to do? (1: Create Campaign, 2: View Campaigns):"


class Prompter:
    """
    Line-oriented operator input, usable once.

    ``close()`` releases it; asking after that is a programming error.
    """

    def __init__(self) -> None:
        self.closed = False

    def ask(self, question: str) -> str:
        if self.closed:
            raise RuntimeError("Prompter is closed")
        return click.prompt(question, default="", show_default=False, prompt_suffix=" ")

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "Prompter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def parse_role(text: str) -> Role:
    """Map operator input to a role (case-insensitive)."""
    role = ROLE_ALIASES.get(text.strip().lower())
    if role is None:
        raise InvalidSelection("Invalid input! Please type 'deployer' or 'user'.")
    return role


def parse_admin_action(text: str) -> Action:
    action = ADMIN_ACTIONS.get(text.strip())
    if action is None:
        raise InvalidSelection("Invalid input! Please choose '1' or '2'.")
    return action


def parse_campaign_id(text: str) -> int:
    try:
        campaign_id = int(text.strip())
    except ValueError:
        raise InvalidAmount(f"Campaign ID must be a whole number, got {text!r}") from None
    if campaign_id < 1:
        raise InvalidAmount(f"Campaign ID must be positive, got {campaign_id}")
    return campaign_id


def select(prompter: Prompter) -> tuple[Role, Action]:
    """
    Ask for role and action, validated before anything is dispatched.

    Raises:
        InvalidSelection: On the first unrecognized answer
    """
    role = parse_role(prompter.ask(ROLE_PROMPT))
    if role is Role.PARTICIPANT:
        return role, Action.DONATE
    return role, parse_admin_action(prompter.ask(ACTION_PROMPT))


# ============ Workflows ============


def create_campaign_flow(ctx: RiteContext, prompter: Prompter) -> None:
    click.echo("\nDeployer Campaign Creation Mode")
    title = prompter.ask("Enter the campaign title:")
    description = prompter.ask("Enter the campaign description:")
    target = to_base_units(prompter.ask("Enter the target amount in ETH:"))

    intent = create_campaign(ctx.gateway, title, description, target)
    record = ctx.confirm(intent, "Creating campaign")
    click.secho(f"Campaign created successfully in block {record.block_number}", fg="green")


def view_campaigns_flow(ctx: RiteContext, prompter: Prompter) -> None:
    click.echo("\nDeployer Campaign Management Mode")

    shown = 0
    for campaign in CampaignSequence(ctx.gateway):
        click.echo()
        click.echo(f"  Campaign ID: {campaign.campaign_id}")
        click.echo(f"  Title: {campaign.title}")
        click.echo(f"  Description: {campaign.description}")
        click.echo(f"  Target Amount: {format_units(campaign.target_amount)}")
        click.echo(f"  Raised Amount: {format_units(campaign.raised_amount)}")
        click.echo(f"  Status: {campaign.status}")
        shown += 1

    if not shown:
        click.echo("No campaigns found.")


def donate_flow(ctx: RiteContext, prompter: Prompter) -> None:
    click.echo("\nUser Donation Mode")
    campaign_id = parse_campaign_id(prompter.ask("Enter the campaign ID to donate to:"))
    amount = to_base_units(prompter.ask("Enter the donation amount in ETH:"))

    intent = donate(ctx.gateway, campaign_id, amount)
    record = ctx.confirm(intent, "Donating")
    click.secho(f"Donation successful in block {record.block_number}", fg="green")


FLOWS: dict[Action, tuple[str, Callable[[RiteContext, Prompter], None]]] = {
    Action.CREATE_CAMPAIGN: ("creating campaign", create_campaign_flow),
    Action.VIEW_CAMPAIGNS: ("fetching campaigns", view_campaigns_flow),
    Action.DONATE: ("donating to campaign", donate_flow),
}


def run_session(ctx: RiteContext, prompter: Optional[Prompter] = None) -> int:
    """
    Run one interactive session.

    Returns:
        0 if the chosen workflow succeeded, otherwise an error exit code
    """
    prompter = prompter or Prompter()
    with prompter:
        try:
            _, action = select(prompter)
        except InvalidSelection as exc:
            click.secho(f"Error selecting role or action: {exc.label}: {exc}", fg="red")
            return exc.exit_code

        description, flow = FLOWS[action]
        return perform(description, flow, ctx, prompter)
