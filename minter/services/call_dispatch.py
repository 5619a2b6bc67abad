"""Call Dispatch: invoke a named operation on a contract handle.

Invariants:
    - Operation lookup goes through handle.operations only (no getattr probing)
    - Unknown operation returns None, never raises; None means "unsupported",
      not "failed"
    - args given (even empty): operation(*args, metadata), metadata defaulting to {}
    - args omitted: operation() with NO arguments; metadata is not appended
    - Awaitable results are awaited; results are returned verbatim
    - Exceptions raised by the operation propagate unchanged (no retry, no timeout)

Design Decisions:
    - The zero-argument path drops metadata, matching how the minting page has
      always called contracts; tests pin it. Callers that need options on a
      parameterless call must pass args=[].
"""

import inspect
import logging
from typing import Any, Sequence

from minter.core.contract_protocols import ContractHandle
from minter.core.domain_types import CallMetadata

logger = logging.getLogger(__name__)


class CallDispatcher:
    """Routes operation_name -> handle.operations[operation_name]."""

    def supports(self, operation_name: str, handle: ContractHandle) -> bool:
        return operation_name in handle.operations

    async def invoke(
        self,
        operation_name: str,
        handle: ContractHandle,
        args: Sequence[Any] | None = None,
        metadata: CallMetadata | None = None,
    ) -> Any | None:
        """Call the operation and return its result, or None if unsupported."""
        operation = handle.operations.get(operation_name)
        if operation is None:
            logger.debug(
                f"No operation '{operation_name}' on {handle.name}",
                extra={"operation": operation_name},
            )
            return None

        if args is not None:
            result = operation(*args, metadata if metadata is not None else {})
        else:
            result = operation()

        if inspect.isawaitable(result):
            result = await result
        return result
