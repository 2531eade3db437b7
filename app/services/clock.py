from datetime import datetime, timezone
import secrets


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class RandomCodeGenerator:
    """Uniform numeric codes without a leading zero, e.g. 100000-999999."""

    def __init__(self, length: int = 6) -> None:
        if length < 1:
            raise ValueError("Code length must be positive")
        self._low = 10 ** (length - 1)
        self._span = 9 * self._low

    def generate(self) -> str:
        return str(self._low + secrets.randbelow(self._span))
