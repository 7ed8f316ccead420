"""Translation of domain exceptions into HTTP errors"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from finance_tracker.domain.exceptions import (
    CardNotFoundError,
    LedgerValidationError,
    StoreUnavailableError,
    TransactionNotFoundError,
)
from finance_tracker.infrastructure.observability.metrics import record_operation


@contextmanager
def ledger_errors(operation: str, request_id: str) -> Iterator[None]:
    """
    Map failures of a ledger call to HTTP status codes.

    - Validation → 422 (nothing was written)
    - Unknown card/transaction → 404
    - Storage failure → 503 (request not applied, caller may resubmit)
    """
    try:
        yield
    except LedgerValidationError as e:
        record_operation(operation, "rejected")
        logging.warning(f"Rejected {operation}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e)) from e

    except (CardNotFoundError, TransactionNotFoundError) as e:
        record_operation(operation, "not_found")
        logging.warning(f"Not found during {operation}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e)) from e

    except StoreUnavailableError as e:
        record_operation(operation, "unavailable")
        logging.error(f"Store error during {operation}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Ledger store unavailable") from e
