"""Shared fixtures: an in-memory contract handle and a workflow context."""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

import pytest

from oblatio.gateway import ContractGateway
from oblatio.models import TransactionIntent
from oblatio.rites.common import RiteContext
from oblatio.rites.session import Prompter

Result = Union[tuple, dict, Exception, Callable[[tuple], Any]]

ONE_ETH = 10 ** 18


class FakeContract:
    """
    Stand-in for a deployed contract.

    Results are registered per function name as a value, a callable taking
    the call's args, or an exception to raise.  Every call is recorded in
    ``calls`` as ``(kind, function_name, args, value)``.
    """

    def __init__(self) -> None:
        self.results: dict[str, Result] = {}
        self.calls: list[tuple[str, str, tuple, int]] = []
        self.write_error: Optional[Exception] = None
        self.wait_error: Optional[Exception] = None
        self.block_number = 100
        self.status = 1
        self.waited: list[TransactionIntent] = []

    def _result(self, function_name: str, args: tuple) -> Any:
        result = self.results[function_name]
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(args)
        return result

    def query(self, function_name: str, args: tuple = ()) -> tuple:
        self.calls.append(("query", function_name, tuple(args), 0))
        return self._result(function_name, tuple(args))

    def query_fields(self, function_name: str, args: tuple = ()) -> dict[str, Any]:
        self.calls.append(("query", function_name, tuple(args), 0))
        return self._result(function_name, tuple(args))

    def write(self, function_name: str, args: tuple = (), value: int = 0) -> TransactionIntent:
        self.calls.append(("write", function_name, tuple(args), value))
        if self.write_error is not None:
            raise self.write_error
        return TransactionIntent(
            function_name=function_name,
            args=tuple(args),
            value=value,
            tx_hash="0x" + format(len(self.calls), "064x"),
        )

    def wait(self, intent: TransactionIntent, timeout: Optional[float] = None) -> dict:
        self.waited.append(intent)
        if self.wait_error is not None:
            raise self.wait_error
        return {
            "transactionHash": intent.tx_hash,
            "blockNumber": hex(self.block_number),
            "status": hex(self.status),
            "gasUsed": "0x5208",
        }

    def calls_to(self, function_name: str) -> list[tuple[str, str, tuple, int]]:
        return [call for call in self.calls if call[1] == function_name]


class ScriptedPrompter(Prompter):
    """Prompter that answers from a list and records every question."""

    def __init__(self, answers: list[str]) -> None:
        super().__init__()
        self.answers = list(answers)
        self.questions: list[str] = []

    def ask(self, question: str) -> str:
        if self.closed:
            raise RuntimeError("Prompter is closed")
        self.questions.append(question)
        return self.answers.pop(0)


def campaign_fields(campaign_id: int, completed: bool = False) -> dict[str, Any]:
    return {
        "id": campaign_id,
        "title": f"Campaign {campaign_id}",
        "description": f"Description {campaign_id}",
        "targetAmount": 5 * ONE_ETH,
        "raisedAmount": ONE_ETH // 2,
        "isCompleted": completed,
    }


@pytest.fixture()
def fake_contract() -> FakeContract:
    return FakeContract()


@pytest.fixture()
def gateway(fake_contract: FakeContract) -> ContractGateway:
    return ContractGateway(fake_contract)


@pytest.fixture()
def ctx(gateway: ContractGateway) -> RiteContext:
    return RiteContext(gateway=gateway, explorer_url=None)
