"""Dynamic loader for OpenSSL libcrypto using CFFI (ABI mode)."""

import ctypes.util
import logging
import os
import sys
from pathlib import Path
from typing import Any

from cffi import FFI

__ALL__ = ["ffi", "libcrypto", "ENV_LIBCRYPTO"]

logger = logging.getLogger(__name__)

ENV_LIBCRYPTO = "PYCMAC_LIBCRYPTO"


def _platform_lib_names() -> list[str]:
    if sys.platform == "darwin":
        return ["libcrypto.3.dylib", "libcrypto.dylib"]
    if os.name == "nt":
        return ["libcrypto-3-x64.dll", "libcrypto-3.dll"]
    return ["libcrypto.so.3", "libcrypto.so.1.1", "libcrypto.so"]


def _candidates() -> list[str]:
    override = os.environ.get(ENV_LIBCRYPTO)
    if override:
        return [override]
    names = []
    found = ctypes.util.find_library("crypto")
    if found:
        names.append(found)
    names.extend(n for n in _platform_lib_names() if n not in names)
    return names


def _load_libcrypto():
    errors = []
    for candidate in _candidates():
        try:
            lib = ffi.dlopen(candidate)
        except OSError as e:
            errors.append(f"{candidate}: {e}")
            continue
        logger.debug("Loaded libcrypto from %s", candidate)
        return lib
    raise OSError("Could not load libcrypto. Tried: " + "; ".join(errors))


ffi = FFI()
ffi.cdef(Path(__file__).with_name("libcrypto_cdef.h").read_text(encoding="utf-8"))
_lib: Any = None


def libcrypto() -> Any:
    """Return the libcrypto handle, opening it on first use."""
    global _lib
    if _lib is None:
        _lib = _load_libcrypto()
    return _lib
