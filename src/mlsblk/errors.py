"""Error kinds raised by the topology engine."""


class TopologyParseError(Exception):
    """The bulk disk listing is unavailable or structurally invalid. Fatal for the run."""


class LookupFailure(Exception):
    """A per-device metadata lookup failed. Callers degrade instead of propagating."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(f"{identifier}: {reason}")
        self.identifier = identifier
        self.reason = reason
