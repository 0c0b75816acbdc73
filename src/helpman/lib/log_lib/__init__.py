"""
log_lib - THAC0 verbosity-gated output with named channels.

Everything helpman says besides the manual page itself goes through this
package: debug detail from the parsers, warnings, errors and hints.

Public API:
    OutputManager      - verbosity/channels coordinator
    init_output        - configure the module-level manager
    get_output         - access the module-level manager
    Hint               - hint dataclass
    register_hint      - register one hint
    register_hints     - register several hints
    get_hint           - look up a hint by ID
    ChannelConfig      - parsed channel spec
    parse_channel_spec - parse a CHANNEL[:LEVEL] spec
    trace              - function tracing decorator
"""

from .manager import OutputManager, init_output, get_output
from .hints import (
    Hint, register_hint, register_hints, get_hint, get_hints_by_category,
)
from .channels import (
    ChannelConfig, parse_channel_spec, KNOWN_CHANNELS,
    CHANNEL_DESCRIPTIONS, OPT_IN_CHANNELS, format_channel_list,
)
from .trace import trace

__all__ = [
    'OutputManager', 'init_output', 'get_output',
    'Hint', 'register_hint', 'register_hints', 'get_hint', 'get_hints_by_category',
    'ChannelConfig', 'parse_channel_spec', 'KNOWN_CHANNELS',
    'CHANNEL_DESCRIPTIONS', 'OPT_IN_CHANNELS', 'format_channel_list',
    'trace',
]
