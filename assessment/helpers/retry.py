import asyncio
from typing import Awaitable, Callable, TypeVar

from assessment.commons.errors import TransportError
from assessment.commons.logger import logger

T = TypeVar("T")


def backoff_delay(base_delay: float, attempt: int) -> float:
    """baseDelay * 2^(attempt-1); attempt empieza en 1."""
    return base_delay * (2 ** (attempt - 1))


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    attempts: int = 3,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Ejecuta ``fn`` hasta ``attempts`` veces.
    - Solo reintenta errores retryable (RateLimited, ServerError).
    - Cualquier otro error se propaga de inmediato.
    - Agotados los intentos se propaga el ultimo error.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await fn()
        except TransportError as ex:
            if not ex.retryable or attempt == attempts:
                raise
            delay = backoff_delay(base_delay, attempt)
            logger.warning(f"Attempt {attempt}/{attempts} failed ({ex}), retrying in {delay:.2f}s...")
            await sleep(delay)
    raise ValueError("attempts must be >= 1")
