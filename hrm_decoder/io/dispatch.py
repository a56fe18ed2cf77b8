"""Selection of the format variant for an exercise file.

A file is recognized by its extension and by the signature byte following
the size field. The registry is filled at import time; adding a device means
adding one variant module and registering its ``VARIANT``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..config import SIGNATURE_OFFSET, SRD_EXTENSIONS
from ..errors import MissingFileError, UnreadableFileError, UnsupportedFormatError
from ..parsers import s610, s625x, s710
from ..parsers.common import FormatVariant

logger = logging.getLogger(__name__)

_REGISTRY: Dict[int, FormatVariant] = {}


def register_variant(variant: FormatVariant) -> None:
    if variant.signature in _REGISTRY:
        raise ValueError(f"Signature 0x{variant.signature:02x} already registered for {_REGISTRY[variant.signature].file_type.value}")
    _REGISTRY[variant.signature] = variant


def known_variants() -> List[FormatVariant]:
    return [_REGISTRY[signature] for signature in sorted(_REGISTRY)]


def _read_head(path: Path) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read(SIGNATURE_OFFSET + 1)
    except FileNotFoundError as e:
        raise MissingFileError("exercise file not found", path=str(path)) from e
    except OSError as e:
        raise UnreadableFileError(f"cannot read exercise file ({e})", path=str(path)) from e


def select_variant(path: Union[str, Path], head: Optional[bytes] = None) -> FormatVariant:
    """Return the variant able to decode ``path``.

    ``head`` holds the leading bytes of the file when the caller already read
    them; otherwise they are read from disk.
    """
    path = Path(path)
    if path.suffix.lower() not in SRD_EXTENSIONS:
        raise UnsupportedFormatError(f"unsupported file extension '{path.suffix}'", path=str(path))

    if head is None:
        head = _read_head(path)
    if len(head) <= SIGNATURE_OFFSET:
        raise UnsupportedFormatError("file too short to carry a format signature", path=str(path))

    signature = head[SIGNATURE_OFFSET]
    variant = _REGISTRY.get(signature)
    if variant is None:
        raise UnsupportedFormatError(f"unknown format signature 0x{signature:02x}", path=str(path), offset=SIGNATURE_OFFSET)

    logger.debug(f"Selected {variant.file_type.value} for {path.name}")
    return variant


for _variant in (s610.VARIANT, s710.VARIANT, s625x.VARIANT):
    register_variant(_variant)
