class DecodeError(ValueError):
    """Base class for every failure raised while decoding an asset."""


class MalformedHeaderError(DecodeError):
    pass


class UnexpectedChunkError(DecodeError):
    def __init__(self, expected: str, found: str, offset: int) -> None:
        super().__init__(f'expected {expected!r} chunk at {offset} but got {found!r}')
        self.expected = expected
        self.found = found
        self.offset = offset


class UnsupportedVariantError(DecodeError):
    pass


class TruncatedDataError(DecodeError):
    def __init__(self, offset: int, requested: int, available: int) -> None:
        super().__init__(
            f'cannot read {requested} units at offset {offset}: '
            f'only {available} available'
        )
        self.offset = offset
        self.requested = requested
        self.available = available


class PaletteMissingError(DecodeError):
    pass
