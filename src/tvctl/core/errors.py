"""Error taxonomy for the tvctl daemon.

Every component raises one of these at its boundary; ``tvctl.main`` is the
only place that catches them, logs a single line and exits.
"""


class TvctlError(RuntimeError):
    """Base class for all daemon failures."""


class ConfigLoadFailed(TvctlError):
    pass


class ConfigSyntaxError(TvctlError):
    pass


class PortOpenFailed(TvctlError):
    pass


class PortConfigFailed(TvctlError):
    pass


class PortReadFailed(TvctlError):
    pass


class PortCloseFailed(TvctlError):
    pass


class MalformedCode(TvctlError):
    pass


class ExternalActionFailed(TvctlError):
    pass


class ReadinessNotifyFailed(TvctlError):
    pass
