"""
Turn values inside out with a single-dispatch generic function.
"""

import logging
import numbers
from collections.abc import Callable, Iterable, Mapping
from functools import singledispatch
from typing import Any, Optional

import numpy as np
import xarray as xa
from attrs import Attribute, cmp_using, define, evolve, field
from numpy.typing import ArrayLike, NDArray

_MISSING = -1
_DIM_DEFAULT = "row"
_TEXT_KINDS = "US"
_NUMERIC_KINDS = "ifc"
_BOOL_KINDS = "b"
_OBJECT_KINDS = "O"

_logger = logging.getLogger(__name__)


class UnsupportedCategory(TypeError):
    """Raised if no bizarro implementation is registered for a value's type."""

    def __init__(self, category: str):
        super().__init__(f"Don't know how to make bizarro <{category}>")
        self.category = category


def _readonly(value: ArrayLike, dtype=None) -> NDArray:
    arr = np.array(value, dtype=dtype)
    arr.setflags(write=False)
    return arr


def _as_codes(value: ArrayLike) -> NDArray[np.intp]:
    codes = _readonly(value, dtype=np.intp)
    if codes.ndim != 1:
        raise ValueError(f"Factor codes must be 1-dimensional, got {codes.ndim} dims")
    return codes


def _check_codes(instance: "Factor", attribute: Attribute, value: NDArray[np.intp]):
    n = len(instance.levels)
    if np.any((value < _MISSING) | (value >= n)):
        raise ValueError(f"Factor codes must be in [{_MISSING}, {n}), got {value}")


def _check_levels(instance: "Factor", attribute: Attribute, value: tuple):
    if len(set(value)) != len(value):
        raise ValueError(f"Factor levels must be unique, got {list(value)}")


@define(frozen=True, repr=False)
class Factor:
    """
    A categorical vector: a fixed, ordered set of labels, and
    one label (or nothing) per element.

    Notes
    -----
    Labels are stored once, in `levels`, in their declared order.
    Elements are stored as indices into `levels`, with -1 marking
    a missing value. Use `factor()` to build one from labels.
    """

    codes: NDArray[np.intp] = field(
        converter=_as_codes,
        validator=_check_codes,
        eq=cmp_using(eq=np.array_equal),
        hash=False,
    )
    levels: tuple = field(converter=tuple, validator=_check_levels)
    ordered: bool = field(default=False)

    @property
    def values(self) -> NDArray[np.object_]:
        """Each element's label, `None` where missing."""
        labels = np.empty(len(self.codes), dtype=object)
        for i, code in enumerate(self.codes):
            labels[i] = None if code == _MISSING else self.levels[code]
        return labels

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self):
        return iter(self.values)

    def __repr__(self):
        ordered = ", ordered=True" if self.ordered else ""
        return f"Factor({list(self.values)!r}, levels={list(self.levels)!r}{ordered})"


def factor(
    values: Iterable[Any],
    levels: Optional[Iterable[Any]] = None,
    ordered: bool = False,
) -> Factor:
    """
    Create a `Factor` from labels. If `levels` isn't given, it
    is the sorted unique labels. Labels not found in `levels`
    become missing.
    """
    values = list(values)
    if levels is None:
        levels = sorted({v for v in values if v is not None})
    levels = tuple(levels)
    index = {level: i for i, level in enumerate(levels)}
    codes = [index.get(v, _MISSING) for v in values]
    return Factor(codes=np.array(codes, dtype=np.intp), levels=levels, ordered=ordered)


_Column = np.ndarray | Factor


def _as_column(value: Any) -> _Column:
    match value:
        case Factor():
            return value
        case xa.DataArray():
            value = value.values
    arr = _readonly(value)
    if arr.ndim != 1:
        raise ValueError(f"Table columns must be 1-dimensional, got {arr.ndim} dims")
    return arr


def _as_columns(value: Mapping[str, Any]) -> dict[str, _Column]:
    columns = {}
    for name, column in dict(value).items():
        if not isinstance(name, str):
            raise TypeError(f"Table column names must be strings, got {type(name).__name__}")
        columns[name] = _as_column(column)
    return columns


def _check_lengths(instance: "Table", attribute: Attribute, value: dict[str, _Column]):
    lengths = {n: len(c) for n, c in value.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"Table columns must have equal lengths, got {lengths}")


def _column_equal(a: _Column, b: _Column) -> bool:
    if isinstance(a, Factor) or isinstance(b, Factor):
        return type(a) is type(b) and a == b
    return np.array_equal(a, b)


def _columns_equal(a: dict[str, _Column], b: dict[str, _Column]) -> bool:
    return list(a) == list(b) and all(_column_equal(a[n], b[n]) for n in a)


@define(frozen=True)
class Table:
    """An ordered mapping of column names to equal-length columns."""

    columns: dict[str, _Column] = field(
        converter=_as_columns,
        validator=_check_lengths,
        eq=cmp_using(eq=_columns_equal),
        hash=False,
    )

    @property
    def names(self) -> list[str]:
        return list(self.columns)

    @property
    def nrow(self) -> int:
        return next((len(c) for c in self.columns.values()), 0)

    @property
    def ncol(self) -> int:
        return len(self.columns)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.nrow, self.ncol)

    def __getitem__(self, name: str) -> _Column:
        return self.columns[name]

    def __contains__(self, name: str) -> bool:
        return name in self.columns

    def to_dataset(self, dim: str = _DIM_DEFAULT) -> xa.Dataset:
        """
        Convert to an `xarray.Dataset` with one data variable per
        column along a single dimension `dim`. Factor columns are
        stored as their labels.
        """
        return xa.Dataset(
            data_vars={
                n: (dim, c.values if isinstance(c, Factor) else c) for n, c in self.columns.items()
            }
        )

    @classmethod
    def from_dataset(cls, dataset: xa.Dataset) -> "Table":
        """Create a table from a `xarray.Dataset`'s (1-dimensional) data variables."""
        return cls({str(n): v.values for n, v in dataset.data_vars.items()})


@singledispatch
def bizarro(x: Any) -> Any:
    """
    Make a bizarro version of `x`: text is reversed, numbers and
    booleans negated, factor levels reversed, tables transformed
    column by column, names and all.

    Notes
    -----
    Dispatch is on the type of `x`. Implementations for other
    types can be added with `register()`. If there is none for
    `x`'s type, `UnsupportedCategory` is raised.
    """
    category = type(x).__name__
    _logger.debug("no bizarro implementation for %s", category)
    raise UnsupportedCategory(category)


def register(cls: Any, func: Optional[Callable] = None) -> Callable:
    """
    Register a bizarro implementation for `cls`. Works like
    `functools.singledispatch`'s `register()`: as a decorator,
    with or without a type argument, or called with a function.
    """
    _logger.debug("registering bizarro implementation for %s", getattr(cls, "__name__", cls))
    return bizarro.register(cls, func)


def is_supported(x: Any) -> bool:
    """Check whether a bizarro implementation is registered for `x`'s type."""
    return bizarro.dispatch(type(x)) is not bizarro.registry[object]


@bizarro.register(str)
@bizarro.register(bytes)
def _bizarro_text(x):
    return x[::-1]


@bizarro.register(numbers.Number)
def _bizarro_number(x):
    return -x


@bizarro.register(bool)
def _bizarro_bool(x: bool) -> bool:
    return not x


@bizarro.register(np.bool_)
def _bizarro_np_bool(x: np.bool_) -> np.bool_:
    return np.logical_not(x)


@bizarro.register(list)
def _bizarro_list(x: list) -> list:
    return [bizarro(v) for v in x]


@bizarro.register(tuple)
def _bizarro_tuple(x: tuple) -> tuple:
    return tuple(bizarro(v) for v in x)


@bizarro.register(np.ndarray)
def _bizarro_array(x: NDArray) -> NDArray:
    match x.dtype.kind:
        case kind if kind in _TEXT_KINDS:
            flipped = [s[::-1] for s in x.ravel().tolist()]
            return np.array(flipped, dtype=x.dtype).reshape(x.shape)
        case kind if kind in _NUMERIC_KINDS:
            return np.negative(x)
        case kind if kind in _BOOL_KINDS:
            return np.logical_not(x)
        case kind if kind in _OBJECT_KINDS:
            out = np.empty(x.shape, dtype=object)
            for i, v in enumerate(x.flat):
                out.flat[i] = bizarro(v)
            return out
        case _:
            raise UnsupportedCategory(f"ndarray[{x.dtype}]")


@bizarro.register(Factor)
def _bizarro_factor(x: Factor) -> Factor:
    # code i (label L) -> code n-1-i (label bizarro(L))
    n = len(x.levels)
    levels = tuple(reversed([bizarro(level) for level in x.levels]))
    codes = np.where(x.codes == _MISSING, _MISSING, n - 1 - x.codes)
    return evolve(x, codes=codes, levels=levels)


@bizarro.register(Table)
def _bizarro_table(x: Table) -> Table:
    names = bizarro(x.names)
    return Table(dict(zip(names, (bizarro(c) for c in x.columns.values()))))


@bizarro.register(xa.DataArray)
def _bizarro_dataarray(x: xa.DataArray) -> xa.DataArray:
    return x.copy(data=bizarro(x.values))


@bizarro.register(xa.Dataset)
def _bizarro_dataset(x: xa.Dataset) -> xa.Dataset:
    flipped = x.map(bizarro, keep_attrs=True)
    return flipped.rename_vars({n: bizarro(n) for n in flipped.data_vars})


__all__ = [
    "Factor",
    "Table",
    "UnsupportedCategory",
    "bizarro",
    "factor",
    "is_supported",
    "register",
]
