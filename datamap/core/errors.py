"""Exception hierarchy for datamap. Everything raised on purpose derives from DataMapError."""


class DataMapError(Exception):
    """Base class for all render failures."""


class RangeFitError(DataMapError):
    """A value does not fall inside any computed range."""

    def __init__(self, code: str, value: float):
        self.code = code
        self.value = value
        super().__init__(f"Value {value} of '{code}' doesn't fit in any range")


class PaletteCapacityError(DataMapError):
    """More ranges were computed than the palette has colours."""

    def __init__(self, ranges: int, colours: int):
        self.ranges = ranges
        self.colours = colours
        super().__init__(f'There are more ranges ({ranges}) than colours ({colours})')


class PaletteError(DataMapError):
    """A palette file line is not three integers in 0-255."""


class ResourceNotFoundError(DataMapError, FileNotFoundError):
    """A template, palette or label file is missing."""


class TemplateMarkerError(DataMapError):
    """The template lacks a marker needed for an insertion."""


class UnmatchedCountryError(DataMapError):
    """Strict painting found data codes without a template element."""

    def __init__(self, codes: list[str]):
        self.codes = codes
        super().__init__(f'No template element for: {", ".join(codes)}')


class ExportError(DataMapError):
    """The requested output format cannot be written."""
