"""
Error Taxonomy
==============
Every error raised here is reported before any state is mutated.
"""


class TuningSpringsError(ValueError):
    """Base class for all recoverable errors of the package."""


class UnknownTuningName(TuningSpringsError):
    """Raised when selecting a tuning that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tuning: '{name}'.")
        self.name = name


class InvalidNoteLabel(TuningSpringsError):
    """Raised when looking up a note that is not part of the registry."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Note '{label}' is not part of the note registry.")
        self.label = label


class DegenerateEquilibriumInput(TuningSpringsError):
    """Raised when the equilibrium predictor is asked about zero notes."""

    def __init__(self) -> None:
        super().__init__("Equilibrium prediction requires at least one sounding note.")
