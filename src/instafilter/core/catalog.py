"""Static catalog describing which parameters every filter variant accepts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..errors import UnknownFilterError


class ParameterName(str, Enum):
    """Universe of tunable inputs a filter may declare."""

    INTENSITY = "Intensity"
    RADIUS = "Radius"
    SCALE = "Scale"


class FilterVariant(str, Enum):
    """Closed set of supported filters keyed by their backend identifier."""

    CRYSTALLIZE = "crystallize"
    EDGES = "edges"
    GAUSSIAN_BLUR = "gaussianBlur"
    PIXELLATE = "pixellate"
    SEPIA_TONE = "sepiaTone"
    UNSHARP_MASK = "unsharpMask"
    VIGNETTE = "vignette"

    @property
    def identifier(self) -> str:
        return self.value


@dataclass(frozen=True)
class FilterDescriptor:
    """Immutable metadata for a single :class:`FilterVariant`."""

    variant: FilterVariant
    display_name: str
    button_label: str
    parameters: frozenset[ParameterName]

    def accepts(self, name: ParameterName) -> bool:
        """Return ``True`` when the filter declares *name* as an input."""

        return name in self.parameters


DEFAULT_BUTTON_LABEL = "Change Filter"

# Menu order.  The parameter sets match the native input keys the backend
# filters expose, so a filter never receives a value it does not declare.
_DESCRIPTORS: tuple[FilterDescriptor, ...] = (
    FilterDescriptor(
        FilterVariant.CRYSTALLIZE,
        "Crystallize",
        "Crystallize",
        frozenset({ParameterName.RADIUS}),
    ),
    FilterDescriptor(
        FilterVariant.EDGES,
        "Edges",
        "Edges",
        frozenset({ParameterName.INTENSITY}),
    ),
    FilterDescriptor(
        FilterVariant.GAUSSIAN_BLUR,
        "Gaussian Blur",
        "Gaussian",
        frozenset({ParameterName.RADIUS}),
    ),
    FilterDescriptor(
        FilterVariant.PIXELLATE,
        "Pixellate",
        "Pixellate",
        frozenset({ParameterName.SCALE}),
    ),
    FilterDescriptor(
        FilterVariant.SEPIA_TONE,
        "Sepia Tone",
        "Sepia Tone",
        frozenset({ParameterName.INTENSITY}),
    ),
    FilterDescriptor(
        FilterVariant.UNSHARP_MASK,
        "Unsharp Mask",
        "Unsharp Mask",
        frozenset({ParameterName.INTENSITY, ParameterName.RADIUS}),
    ),
    FilterDescriptor(
        FilterVariant.VIGNETTE,
        "Vignette",
        "Vignette",
        frozenset({ParameterName.INTENSITY, ParameterName.RADIUS}),
    ),
)

FILTER_CATALOG: dict[FilterVariant, FilterDescriptor] = {
    descriptor.variant: descriptor for descriptor in _DESCRIPTORS
}


def descriptor_for(variant: FilterVariant) -> FilterDescriptor:
    """Return the descriptor registered for *variant*.

    Passing anything other than a :class:`FilterVariant` member is a
    programming error and raises :class:`KeyError`.
    """

    return FILTER_CATALOG[variant]


def iter_descriptors() -> Iterator[FilterDescriptor]:
    """Yield every descriptor in menu order."""

    return iter(_DESCRIPTORS)


def parse_variant(identifier: str | FilterVariant) -> FilterVariant:
    """Resolve *identifier* to a :class:`FilterVariant`.

    Both the backend identifiers (``"gaussianBlur"``) and the enum member
    names (``"GAUSSIAN_BLUR"``, case-insensitive) are accepted.
    """

    if isinstance(identifier, FilterVariant):
        return identifier
    text = str(identifier).strip()
    try:
        return FilterVariant(text)
    except ValueError:
        pass
    try:
        return FilterVariant[text.upper()]
    except KeyError:
        raise UnknownFilterError(f"Unknown filter: {identifier!r}") from None


__all__ = [
    "DEFAULT_BUTTON_LABEL",
    "FILTER_CATALOG",
    "FilterDescriptor",
    "FilterVariant",
    "ParameterName",
    "descriptor_for",
    "iter_descriptors",
    "parse_variant",
]
