"""Request dispatcher.

Validates the method name, makes sure the signing runtime is initialized
exactly once, and routes to the handler. Parameter validation errors are
normalized to InvalidParams; everything else propagates unchanged.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from tari_bridge.bridge.accounts import AccountService
from tari_bridge.bridge.contracts import (
    GetFreeTestCoinsRequest,
    SendTransactionRequest,
    TransferRequest,
)
from tari_bridge.exceptions import InvalidParams, MethodNotFound
from tari_bridge.workflow.transaction import TransactionWorkflow, WorkflowOutcome

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Optional[str]], Awaitable[Any]]

METHODS = frozenset({
    "getAccountData",
    "getTransactions",
    "transfer",
    "getFreeTestCoins",
    "sendTransaction",
})


class RuntimeInitializer:
    """Runs an async initializer at most once, even under concurrent callers."""

    def __init__(self, initializer: Callable[[], Awaitable[None]]):
        self._initializer = initializer
        self._lock = asyncio.Lock()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    async def ensure(self) -> None:
        if self._ready:
            return
        async with self._lock:
            if self._ready:
                return
            logger.info("Initializing signing runtime")
            try:
                await self._initializer()
            except Exception as e:
                # Left uninitialized so the next request retries
                logger.error(f"Failed to initialize signing runtime: {e}")
                raise
            self._ready = True


def _parse(model, params: Any):
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise InvalidParams("Params must be an object")
    try:
        return model.model_validate(params)
    except ValidationError as e:
        raise InvalidParams(
            "Invalid params",
            data=[
                {"field": ".".join(str(p) for p in err["loc"]), "error": err["msg"]}
                for err in e.errors()
            ],
        )


def _outcome_result(outcome: WorkflowOutcome) -> Optional[dict]:
    if outcome.result is None:
        return None
    return outcome.result.model_dump()


class Dispatcher:
    """Maps method names to handlers."""

    def __init__(
        self,
        accounts: AccountService,
        workflow: TransactionWorkflow,
        runtime: RuntimeInitializer,
    ):
        self.accounts = accounts
        self.workflow = workflow
        self.runtime = runtime
        self._handlers: dict[str, Handler] = {
            "getAccountData": self._get_account_data,
            "getTransactions": self._get_transactions,
            "transfer": self._transfer,
            "getFreeTestCoins": self._get_free_test_coins,
            "sendTransaction": self._send_transaction,
        }

    async def dispatch(
        self, method: str, params: Any = None, origin: Optional[str] = None
    ) -> Any:
        """Run a method and return its result.

        Returns:
            Handler result; None when the user cancelled a transaction

        Raises:
            MethodNotFound: If the method is not registered
            BridgeError: Any failure from the handler
        """
        if not isinstance(method, str) or method not in METHODS:
            logger.warning(f"Unknown method {method!r} from {origin or 'unknown origin'}")
            raise MethodNotFound(str(method))

        handler = self._handlers[method]
        await self.runtime.ensure()

        logger.info(f"Dispatching {method} from {origin or 'unknown origin'}")
        return await handler(params, origin)

    async def _get_account_data(self, params: Any, origin: Optional[str]) -> dict:
        data = await self.accounts.get_account_data()
        return data.model_dump(by_alias=True)

    async def _get_transactions(self, params: Any, origin: Optional[str]) -> Any:
        return await self.accounts.get_transactions()

    async def _transfer(self, params: Any, origin: Optional[str]) -> Optional[dict]:
        request = _parse(TransferRequest, params)
        return _outcome_result(await self.workflow.transfer(request, origin=origin))

    async def _get_free_test_coins(self, params: Any, origin: Optional[str]) -> Optional[dict]:
        request = _parse(GetFreeTestCoinsRequest, params)
        return _outcome_result(await self.workflow.get_free_test_coins(request, origin=origin))

    async def _send_transaction(self, params: Any, origin: Optional[str]) -> Optional[dict]:
        request = _parse(SendTransactionRequest, params)
        return _outcome_result(await self.workflow.send_transaction(request, origin=origin))


_dispatcher_instance: Optional[Dispatcher] = None


def create_dispatcher(settings=None, signer=None, gate=None, indexer=None) -> Dispatcher:
    """Wire a dispatcher from settings, defaulting to the configured collaborators."""
    from tari_bridge.config import get_settings
    from tari_bridge.confirmation.factory import get_confirmation_gate
    from tari_bridge.indexer.client import IndexerClient
    from tari_bridge.signing.factory import get_signing_provider

    settings = settings or get_settings()
    signer = signer or get_signing_provider()
    gate = gate or get_confirmation_gate()
    indexer = indexer or IndexerClient(settings.tari_indexer_url)

    return Dispatcher(
        accounts=AccountService(indexer, signer, account_index=settings.account_index),
        workflow=TransactionWorkflow(indexer, signer, gate, account_index=settings.account_index),
        runtime=RuntimeInitializer(signer.initialize),
    )


def get_dispatcher() -> Dispatcher:
    """Get the process-wide dispatcher (singleton)."""
    global _dispatcher_instance
    if _dispatcher_instance is None:
        _dispatcher_instance = create_dispatcher()
    return _dispatcher_instance


def reset_dispatcher() -> None:
    """Reset the dispatcher instance (for testing)."""
    global _dispatcher_instance
    _dispatcher_instance = None
