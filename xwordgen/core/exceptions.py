"""Exception and warning hierarchy for crossword construction."""


class CrosswordError(Exception):
    """Base exception for generator failures."""


class ConfigError(CrosswordError):
    """Raised when size or density settings fall outside their bounds."""


class WordSupplyError(CrosswordError):
    """Raised when the word source is unreachable or empty after filtering."""


class PlacementFailure(CrosswordError):
    """Raised when the anchor word cannot be seated in the grid."""


class GenerationFailedError(CrosswordError):
    """Raised when fewer than the minimum viable number of words land."""


class ValidationError(CrosswordError):
    """Raised when the finished grid breaks a structural invariant."""


class CrosswordWarning(UserWarning):
    """Base class for non-fatal conditions attached to a finished puzzle."""


class PartialPlacementWarning(CrosswordWarning):
    """Some selected words could not be placed."""

    def __init__(self, words):
        self.words = tuple(words)
        super().__init__(f"{len(self.words)} word(s) could not be placed: {', '.join(self.words)}")


class ConnectivityWarning(CrosswordWarning):
    """Letter islands remain disconnected after bridging attempts."""

    def __init__(self, island_count: int):
        self.island_count = island_count
        super().__init__(f"{island_count} disconnected letter islands remain after bridging")
