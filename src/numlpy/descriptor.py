# -*- coding: utf-8 -*-
"""
numlpy.descriptor
=================

A small reference descriptor: the schema that maps raw records (mappings,
pandas rows or plain objects) to numeric feature vectors and a numeric label,
and maps numeric predictions back to native label values.

The learner only depends on the interface used here (``convert``,
``convert_one``, ``label.name``, ``label.normalize`` and ``label.decode``);
applications with richer record types can supply their own descriptor.
"""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidConfigurationError

EMPTY_STRING = "#EMPTY#"
SYMBOL_STRING = "#SYM#"
NUMBER_STRING = "#NUM#"


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def get_value(record: Any, name: str) -> Any:
    """Read field ``name`` from a mapping, a pandas row or an object attribute."""
    if isinstance(record, (Mapping, pd.Series)):
        return record[name]
    return getattr(record, name)


def sanitize(value: Any, check_number: bool = True) -> str:
    """Normalise a textual value the way string features are encoded.

    Surrounding whitespace is trimmed, the text is upper-cased and symbols,
    punctuation and separators are dropped.  Blank input becomes
    ``#EMPTY#``, input made only of symbols becomes ``#SYM#`` and, when
    ``check_number`` is set, anything parsing as a float becomes ``#NUM#``.
    """
    if value is None:
        return EMPTY_STRING
    s = str(value).strip().upper()
    if not s:
        return EMPTY_STRING
    item = "".join(c for c in s if unicodedata.category(c)[0] not in ("S", "P", "Z"))
    if not item:
        return SYMBOL_STRING
    if check_number:
        try:
            float(item)
        except ValueError:
            pass
        else:
            return NUMBER_STRING
    return item


def _is_nan(v) -> bool:
    return isinstance(v, float) and math.isnan(v)


# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------
class Property:
    """A numeric field.

    Parameters
    ----------
    name : str
        Field name on the record.
    dtype : type, default=float
        Native type used when decoding a prediction (``float``, ``int`` or
        ``bool``).
    """

    def __init__(self, name: str, dtype: type = float):
        self.name = name
        self.dtype = dtype

    @property
    def length(self) -> int:
        return 1

    def columns(self) -> list[str]:
        return [self.name]

    def preprocess(self, records: Sequence[Any]) -> None:
        """Hook run over the whole example set before conversion."""

    def convert(self, value: Any) -> list[float]:
        if value is None:
            return [math.nan]
        try:
            return [float(value)]
        except (TypeError, ValueError):
            raise ValueError(f"Cannot convert {value!r} ({type(value).__name__}) to a float") from None

    def normalize(self, value: Any) -> Any:
        """Native representation of a raw record value (used for ground truth)."""
        return value

    def decode(self, value: float) -> Any:
        if _is_nan(value):
            return None
        if self.dtype is bool:
            return bool(value >= 0.5)
        if self.dtype is int:
            return int(round(value))
        return self.dtype(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StringProperty(Property):
    """A textual field.

    With ``as_enum=True`` (the default) every distinct sanitised value is one
    category encoded by its position in :attr:`dictionary`.  Otherwise the text
    is split into words and encoded as a bag of word counts over the
    dictionary.
    """

    def __init__(self, name: str, as_enum: bool = True, separator: str = " ",
                 exclude: Iterable[str] = ()):
        super().__init__(name, dtype=str)
        self.as_enum = as_enum
        self.separator = separator
        self.exclude = [sanitize(e, check_number=False) for e in exclude]
        self.dictionary: list[str] = []

    @property
    def length(self) -> int:
        return 1 if self.as_enum else len(self.dictionary)

    def columns(self) -> list[str]:
        return [self.name] if self.as_enum else list(self.dictionary)

    def _words(self, value) -> list[str]:
        if value is None or not str(value).strip():
            return [EMPTY_STRING]
        words = [sanitize(w) for w in str(value).split(self.separator) if w.strip()]
        return [w for w in words if w not in self.exclude]

    def preprocess(self, records):
        seen: dict[str, None] = {}
        for r in records:
            raw = get_value(r, self.name)
            if self.as_enum:
                seen.setdefault(sanitize(raw, check_number=False))
            else:
                for w in self._words(raw):
                    seen.setdefault(w)
        self.dictionary = list(seen)

    def convert(self, value):
        if not self.dictionary:
            raise ValueError(f"{self.name} dictionary has not been built")
        if self.as_enum:
            key = sanitize(value, check_number=False)
            try:
                return [float(self.dictionary.index(key))]
            except ValueError:
                raise ValueError(f"{key!r} does not exist in the {self.name} dictionary") from None
        counts = np.zeros(len(self.dictionary), dtype=float)
        for w in self._words(value):
            if w in self.dictionary:
                counts[self.dictionary.index(w)] += 1
        return counts.tolist()

    def normalize(self, value):
        return sanitize(value, check_number=False)

    def decode(self, value):
        if _is_nan(value):
            return None
        if self.as_enum:
            idx = int(round(value))
            if 0 <= idx < len(self.dictionary):
                return self.dictionary[idx]
            return None
        return str(value)


# -----------------------------------------------------------------------------
# Descriptor
# -----------------------------------------------------------------------------
class Descriptor:
    """Feature/label schema for a collection of records.

    Parameters
    ----------
    features : list[Property]
        Feature properties, converted in order.
    label : Property or None
        The property to learn.
    name : str, default=""
    """

    def __init__(self, features: Sequence[Property], label: Property | None = None,
                 name: str = ""):
        self.features = list(features)
        self.label = label
        self.name = name

    @property
    def vector_length(self) -> int:
        return sum(f.length for f in self.features)

    def columns(self) -> list[str]:
        return [c for f in self.features for c in f.columns()]

    def validate(self) -> None:
        if not self.features:
            raise InvalidConfigurationError("Invalid descriptor: empty feature set")
        if self.label is None:
            raise InvalidConfigurationError("Invalid descriptor: empty label")

    def convert(self, records: Iterable[Any]) -> tuple[np.ndarray, np.ndarray]:
        """Encode ``records`` as a design matrix ``X`` and label vector ``y``.

        String dictionaries are (re)built from ``records`` first.
        """
        self.validate()
        records = list(records)
        for f in self.features:
            f.preprocess(records)
        self.label.preprocess(records)

        X = np.array([self.convert_one(r) for r in records], dtype=float)
        X = X.reshape(len(records), self.vector_length)
        y = np.array([self.label.convert(get_value(r, self.label.name))[0] for r in records],
                     dtype=float)
        return X, y

    def convert_one(self, record: Any, with_label: bool = False) -> np.ndarray:
        """Encode one record.  With ``with_label`` the label value is appended."""
        if not self.features:
            raise InvalidConfigurationError("Cannot convert a record with an empty feature set")
        values: list[float] = []
        for f in self.features:
            values.extend(f.convert(get_value(record, f.name)))
        if with_label and self.label is not None:
            values.extend(self.label.convert(get_value(record, self.label.name)))
        return np.array(values, dtype=float)

    def __repr__(self) -> str:
        return f"Descriptor(features={self.features!r}, label={self.label!r})"

    def __str__(self) -> str:
        lines = [f"Descriptor ({self.name or 'unnamed'}) {{"]
        lines += [f"   {f}" for f in self.features]
        if self.label is not None:
            lines.append(f"  *{self.label}")
        lines.append("}")
        return "\n".join(lines)
