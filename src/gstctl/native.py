"""Ctypes entry points for GObject reference counting.

PyGObject keeps one reference per Python wrapper and hides the rest of the
refcount API. The functions here reach the native counters directly so that
wrappers can hold and give back their own units.
"""

import ctypes
import ctypes.util


def _load(name: str, soname: str) -> ctypes.CDLL:
    return ctypes.CDLL(ctypes.util.find_library(name) or soname)


LIBGOBJECT = _load("gobject-2.0", "libgobject-2.0.so.0")

LIBGOBJECT.g_object_ref.argtypes = [ctypes.c_void_p]
LIBGOBJECT.g_object_ref.restype = ctypes.c_void_p

LIBGOBJECT.g_object_ref_sink.argtypes = [ctypes.c_void_p]
LIBGOBJECT.g_object_ref_sink.restype = ctypes.c_void_p

LIBGOBJECT.g_object_unref.argtypes = [ctypes.c_void_p]
LIBGOBJECT.g_object_unref.restype = None

LIBGOBJECT.g_object_is_floating.argtypes = [ctypes.c_void_p]
LIBGOBJECT.g_object_is_floating.restype = ctypes.c_int

_capsule_name = ctypes.pythonapi.PyCapsule_GetName
_capsule_name.argtypes = [ctypes.py_object]
_capsule_name.restype = ctypes.c_char_p

_capsule_pointer = ctypes.pythonapi.PyCapsule_GetPointer
_capsule_pointer.argtypes = [ctypes.py_object, ctypes.c_char_p]
_capsule_pointer.restype = ctypes.c_void_p


def address(obj: object) -> int | None:
    """Raw GObject pointer behind a PyGObject wrapper, None for None."""
    if obj is None:
        return None
    capsule = getattr(obj, "__gpointer__", None)
    if capsule is None:
        return None
    return _capsule_pointer(capsule, _capsule_name(capsule))


def _pointer(obj: object) -> int:
    ptr = address(obj)
    if not ptr:
        raise ValueError(f"{obj!r} is not backed by a GObject")
    return ptr


def ref(obj: object) -> None:
    LIBGOBJECT.g_object_ref(_pointer(obj))


def unref(obj: object) -> None:
    LIBGOBJECT.g_object_unref(_pointer(obj))


def ref_sink(obj: object) -> None:
    """Claim a floating reference, or add a unit when there is none."""
    LIBGOBJECT.g_object_ref_sink(_pointer(obj))


def is_floating(obj: object) -> bool:
    return bool(LIBGOBJECT.g_object_is_floating(_pointer(obj)))
