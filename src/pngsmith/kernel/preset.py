from dataclasses import dataclass, replace
from typing import Any, TypeVar

from . import helpers, settings
from .buffer import BufferLike
from .png import Png

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _PngPreset(settings._PngSetting, _DefaultOverride):

    # static pass through
    drop_offsets = staticmethod(helpers.drop_offsets)
    findall = staticmethod(helpers.findall)
    print_chunks = staticmethod(helpers.print_chunks)

    # isort: off
    from .resource import (
        read_chunks,
        write_chunks,
    )
    # isort: on

    def load(self, buffer: BufferLike) -> Png:
        return Png.from_bytes(buffer, cfg=self)

    def open(self, path: str) -> Png:
        return Png.from_path(path, cfg=self)


png = _PngPreset()
