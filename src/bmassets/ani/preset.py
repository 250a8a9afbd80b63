from dataclasses import dataclass

from bmassets.kernel.preset import DecoderSettings

from .schema import PREAMBLE


@dataclass(frozen=True)
class AniSettings(DecoderSettings):
    preamble: tuple[bytes, ...] = PREAMBLE


ani = AniSettings()
