"""Exception types for PLATO Learn."""


class PlatoLearnError(Exception):
    """Base class for all PLATO Learn errors."""


class MalformedPersistedState(PlatoLearnError):
    """The persisted progress record could not be parsed or validated."""


class PersistenceWriteFailure(PlatoLearnError):
    """The storage backend rejected a write."""


class ContentError(PlatoLearnError):
    """Module content is missing, invalid, or not reachable."""


class RoundLockedError(PlatoLearnError):
    """A round was started before its prerequisites were passed."""
