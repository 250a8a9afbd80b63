import logging
from dataclasses import dataclass, field, replace
from typing import Any, Self

from bmassets.kernel.errors import MalformedHeaderError


@dataclass(frozen=True)
class _DefaultOverride:
    def __call__(self, **kwargs: Any) -> Self:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DecoderSettings(_DefaultOverride):
    errors: str = 'ignore'
    logger: logging.Logger = field(
        default=logging.getLogger('bmassets'),
        compare=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        if self.errors not in {'strict', 'ignore'}:
            raise ValueError(f'unknown errors mode: {self.errors}')

    def tolerate(self, message: str) -> None:
        """Report a recoverable anomaly; fatal in strict mode."""
        if self.errors == 'strict':
            raise MalformedHeaderError(message)
        self.logger.warning(message)
