"""Transaction workflow.

Every value-moving operation runs the same sequence:

1. Confirm            - ask the user; rejection cancels silently
2. DeriveKeys         - get the account key pair from the signing provider
3. ResolveDependencies- probe the indexer for accounts that may not exist yet
4. Build              - have the signing provider build and sign
5. AssembleSubmission - compute the required substates
6. Submit             - hand the transaction to the indexer

Terminal states are Submitted, Cancelled and Failed. Failures propagate
to the caller; nothing is retried and nothing needs rolling back, since
submission is the only state-changing step.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tari_bridge.bridge.contracts import (
    GetFreeTestCoinsRequest,
    SendTransactionRequest,
    TransactionResult,
    TransferRequest,
)
from tari_bridge.confirmation.base import ConfirmationGate, ConfirmationSummary, OperationKind
from tari_bridge.indexer.client import IndexerClient, substate_ref
from tari_bridge.signing.base import KeyPair, SignedTransaction, SigningProvider

logger = logging.getLogger(__name__)


class WorkflowState(str, Enum):
    CONFIRM = "confirm"
    DERIVE_KEYS = "derive_keys"
    RESOLVE_DEPENDENCIES = "resolve_dependencies"
    BUILD = "build"
    ASSEMBLE_SUBMISSION = "assemble_submission"
    SUBMIT = "submit"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class TransactionSubmission:
    """What is sent to ``submit_transaction``."""
    signed_transaction: SignedTransaction
    is_dry_run: bool = False
    required_substates: list[dict] = field(default_factory=list)


@dataclass
class WorkflowOutcome:
    """Terminal outcome of one workflow run.

    ``result`` is None when the user cancelled.
    """
    state: WorkflowState
    result: Optional[TransactionResult] = None
    submission: Optional[TransactionSubmission] = None

    @property
    def cancelled(self) -> bool:
        return self.state == WorkflowState.CANCELLED


class _Run:
    """Tracks the state of a single invocation for logging."""

    def __init__(self, kind: OperationKind):
        self.kind = kind
        self.state = WorkflowState.CONFIRM

    def advance(self, state: WorkflowState) -> None:
        logger.debug(f"{self.kind.value}: {self.state.value} -> {state.value}")
        self.state = state


class TransactionWorkflow:
    """Runs confirm -> build -> resolve dependencies -> submit."""

    def __init__(
        self,
        indexer: IndexerClient,
        signer: SigningProvider,
        gate: ConfirmationGate,
        account_index: int = 0,
    ):
        self.indexer = indexer
        self.signer = signer
        self.gate = gate
        self.account_index = account_index

    async def transfer(
        self, request: TransferRequest, origin: Optional[str] = None
    ) -> WorkflowOutcome:
        """Transfer a resource to another account.

        The destination account is created within the same transaction
        when the indexer does not know it yet.
        """
        run = _Run(OperationKind.TRANSFER)
        summary = ConfirmationSummary.for_transfer(
            request.destination_public_key, request.resource_address, request.amount, request.fee
        )
        if not await self._confirm(run, summary, origin):
            return WorkflowOutcome(state=WorkflowState.CANCELLED)

        try:
            keys = await self._derive_keys(run)

            run.advance(WorkflowState.RESOLVE_DEPENDENCIES)
            destination_component = await self.signer.compute_component_address(
                request.destination_public_key
            )
            destination_exists = await self.indexer.substate_exists(destination_component)

            run.advance(WorkflowState.BUILD)
            transaction = await self.signer.build_transfer_transaction(
                keys.secret_key,
                request.destination_public_key,
                not destination_exists,
                request.resource_address,
                request.amount,
                request.fee,
            )

            run.advance(WorkflowState.ASSEMBLE_SUBMISSION)
            account_component = await self.signer.compute_component_address(keys.public_key)
            required = [
                substate_ref(account_component),
                substate_ref(request.resource_address),
            ]
            if destination_exists:
                required.append(substate_ref(destination_component))

            submission = TransactionSubmission(
                signed_transaction=transaction,
                is_dry_run=False,
                required_substates=required,
            )
            return await self._submit(run, submission)
        except Exception:
            self._fail(run)
            raise

    async def get_free_test_coins(
        self, request: GetFreeTestCoinsRequest, origin: Optional[str] = None
    ) -> WorkflowOutcome:
        """Deposit free test coins, creating the account on first use."""
        run = _Run(OperationKind.FREE_TEST_COINS)
        summary = ConfirmationSummary.for_free_test_coins(request.amount, request.fee)
        if not await self._confirm(run, summary, origin):
            return WorkflowOutcome(state=WorkflowState.CANCELLED)

        try:
            keys = await self._derive_keys(run)

            run.advance(WorkflowState.RESOLVE_DEPENDENCIES)
            account_component = await self.signer.compute_component_address(keys.public_key)
            account_exists = await self.indexer.substate_exists(account_component)

            run.advance(WorkflowState.BUILD)
            transaction = await self.signer.build_free_test_coins_transaction(
                not account_exists, keys.secret_key, request.amount, request.fee
            )

            run.advance(WorkflowState.ASSEMBLE_SUBMISSION)
            # A new account is created by this transaction, so it cannot be an input
            required = [substate_ref(account_component)] if account_exists else []

            submission = TransactionSubmission(
                signed_transaction=transaction,
                is_dry_run=False,
                required_substates=required,
            )
            return await self._submit(run, submission)
        except Exception:
            self._fail(run)
            raise

    async def send_transaction(
        self, request: SendTransactionRequest, origin: Optional[str] = None
    ) -> WorkflowOutcome:
        """Sign and submit caller-supplied instructions.

        The caller's dependency list and dry-run flag are forwarded as-is.
        """
        run = _Run(OperationKind.SEND_TRANSACTION)
        summary = ConfirmationSummary.for_transaction(request.instructions)
        if not await self._confirm(run, summary, origin):
            return WorkflowOutcome(state=WorkflowState.CANCELLED)

        try:
            keys = await self._derive_keys(run)

            run.advance(WorkflowState.BUILD)
            transaction = await self.signer.build_generic_transaction(
                keys.secret_key, request.instructions, request.input_refs
            )

            run.advance(WorkflowState.ASSEMBLE_SUBMISSION)
            submission = TransactionSubmission(
                signed_transaction=transaction,
                is_dry_run=request.is_dry_run,
                required_substates=[r.model_dump() for r in request.required_substates],
            )
            return await self._submit(run, submission)
        except Exception:
            self._fail(run)
            raise

    async def _confirm(
        self, run: _Run, summary: ConfirmationSummary, origin: Optional[str]
    ) -> bool:
        approved = await self.gate.confirm(run.kind, summary, origin=origin)
        if not approved:
            run.advance(WorkflowState.CANCELLED)
            logger.info(f"{run.kind.value} cancelled by user")
        return approved

    async def _derive_keys(self, run: _Run) -> KeyPair:
        run.advance(WorkflowState.DERIVE_KEYS)
        return await self.signer.derive_key_pair(self.account_index)

    async def _submit(self, run: _Run, submission: TransactionSubmission) -> WorkflowOutcome:
        run.advance(WorkflowState.SUBMIT)
        await self.indexer.submit_transaction(
            submission.signed_transaction.payload,
            submission.required_substates,
            is_dry_run=submission.is_dry_run,
        )

        # Finality is not awaited; the id is already known from signing
        transaction_id = submission.signed_transaction.id
        run.advance(WorkflowState.SUBMITTED)
        logger.info(
            f"{run.kind.value} submitted: {transaction_id}"
            f"{' (dry run)' if submission.is_dry_run else ''}"
        )
        return WorkflowOutcome(
            state=WorkflowState.SUBMITTED,
            result=TransactionResult(transaction_id=transaction_id),
            submission=submission,
        )

    @staticmethod
    def _fail(run: _Run) -> None:
        logger.error(f"{run.kind.value} failed during {run.state.value}")
        run.advance(WorkflowState.FAILED)
