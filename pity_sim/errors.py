class PitySimError(Exception):
    pass


class ConfigError(PitySimError, ValueError):
    """Raised when a caller-side config check fails."""


class SimulationBusyError(PitySimError, RuntimeError):
    """Raised when a run is started while another one is still in flight."""
