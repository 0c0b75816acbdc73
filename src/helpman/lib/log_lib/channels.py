"""
Channel configuration for the THAC0 output system.

A channel is a named output category whose threshold can be pinned
independently of the global verbosity:

    --show parse        # parse channel at level 0
    --show parse:3      # parse channel at level 3 (debug)

The sets below are the library defaults.  Applications replace them at
startup with their own channel set (see helpman.channels).
"""

from dataclasses import dataclass


KNOWN_CHANNELS = {
    'general',      # Default channel
    'hint',         # Hint messages
    'error',        # Error messages
    'trace',        # Function tracing (@trace decorator)
}

CHANNEL_DESCRIPTIONS = {
    'general':  'General output',
    'hint':     'Contextual tips and suggestions',
    'error':    'Error messages',
    'trace':    'Function call tracing',
}

# Off unless explicitly enabled with --show.
OPT_IN_CHANNELS = {
    'trace',
}


@dataclass(frozen=True)
class ChannelConfig:
    """A parsed ``CHANNEL[:LEVEL]`` spec."""
    name: str
    level: int = 0


def parse_channel_spec(spec: str) -> ChannelConfig:
    """Parse ``CHANNEL[:LEVEL]`` into a ChannelConfig.

    An empty level slot means level 0.

    Raises:
        ValueError: If the channel name is empty or LEVEL is not an integer.
    """
    name, _, level = spec.partition(':')
    name = name.strip()
    if not name:
        raise ValueError(f"empty channel name in spec {spec!r}")
    level = level.strip()
    if not level:
        return ChannelConfig(name=name)
    try:
        return ChannelConfig(name=name, level=int(level))
    except ValueError:
        raise ValueError(f"invalid level {level!r} for channel {name!r}") from None


def format_channel_list() -> str:
    """Format the current channel set for ``--show`` listing."""
    lines = ["Available channels:"]
    width = max(len(name) for name in KNOWN_CHANNELS)
    for name in sorted(KNOWN_CHANNELS):
        desc = CHANNEL_DESCRIPTIONS.get(name, '')
        opt_in = " (opt-in)" if name in OPT_IN_CHANNELS else ""
        lines.append(f"  {name:<{width}}  {desc}{opt_in}")
    return "\n".join(lines)
