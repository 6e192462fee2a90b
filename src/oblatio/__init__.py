__all__ = [
    # Errors
    "OblatioError",
    "InvalidAmount",
    "QueryFailed",
    "SubmissionFailed",
    "ConfirmationFailed",
    "InvalidSelection",
    "TransactionReverted",
    # Units
    "to_base_units",
    "to_decimal_units",
    "format_units",
    # Models
    "Record",
    "Campaign",
    "TransactionIntent",
    "TransactionRecord",
    # Gateway / confirmation
    "ContractGateway",
    "total_value",
    "await_confirmation",
    # Contracts
    "ContractHandle",
    "RpcContract",
    "CampaignSequence",
]

from .errors import (
    ConfirmationFailed,
    InvalidAmount,
    InvalidSelection,
    OblatioError,
    QueryFailed,
    SubmissionFailed,
    TransactionReverted,
)
from .units import format_units, to_base_units, to_decimal_units
from .models import Campaign, Record, TransactionIntent, TransactionRecord
from .gateway import ContractGateway, total_value
from .confirm import await_confirmation
from .chain.handle import ContractHandle, RpcContract
from .campaigns import CampaignSequence
