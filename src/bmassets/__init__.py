from bmassets.ani.ali import AnimationList, decode_animation_list
from bmassets.ani.anim import decode_animation_bundle
from bmassets.ani.bundle import Animation, AnimationBundle, Frame
from bmassets.ani.cimg import FrameImage
from bmassets.graphics.atlas import AnimationAtlas
from bmassets.graphics.remap import ColorRemapTable, decode_color_remap_table
from bmassets.kernel.errors import (
    DecodeError,
    MalformedHeaderError,
    PaletteMissingError,
    TruncatedDataError,
    UnexpectedChunkError,
    UnsupportedVariantError,
)
from bmassets.pcx.image import PcxImage, decode_pcx_image
from bmassets.scheme.sch import Cell, Powerup, PowerupInfo, Scheme, decode_scheme

__all__ = (
    'Animation',
    'AnimationAtlas',
    'AnimationBundle',
    'AnimationList',
    'Cell',
    'ColorRemapTable',
    'DecodeError',
    'Frame',
    'FrameImage',
    'MalformedHeaderError',
    'PaletteMissingError',
    'PcxImage',
    'Powerup',
    'PowerupInfo',
    'Scheme',
    'TruncatedDataError',
    'UnexpectedChunkError',
    'UnsupportedVariantError',
    'decode_animation_bundle',
    'decode_animation_list',
    'decode_color_remap_table',
    'decode_pcx_image',
    'decode_scheme',
)
