"""helpman channel definitions for the THAC0 output system.

Keeps log_lib itself project-agnostic: this module swaps log_lib's
default channel set for the one helpman's modules emit on.

Usage:
    from helpman.channels import configure_channels, format_helpman_channel_list
"""

from helpman.lib.log_lib import channels as _ch


HELPMAN_CHANNELS = {
    'parse',        # Help text classification
    'include',      # Include file sections
    'render',       # Manual page assembly
    'exec',         # Running the documented program
    'config',       # Configuration resolution
    'general',      # Default channel
    'hint',         # Contextual tips and suggestions
    'error',        # Error messages
    'trace',        # Function tracing (@trace decorator)
}

HELPMAN_CHANNEL_DESCRIPTIONS = {
    'parse':    'Help text classification (usage, flags, description)',
    'include':  'Include file sections and duplicates',
    'render':   'Manual page assembly and section merging',
    'exec':     'Running the program to capture its help',
    'config':   'Configuration loading and resolution',
    'general':  'General output',
    'hint':     'Contextual tips and suggestions',
    'error':    'Error messages',
    'trace':    'Function call tracing',
}

HELPMAN_OPT_IN_CHANNELS = {
    'trace',
}


def configure_channels():
    """Install the helpman channel set into log_lib.

    Call once at startup before init_output().
    """
    _ch.KNOWN_CHANNELS = HELPMAN_CHANNELS
    _ch.CHANNEL_DESCRIPTIONS = HELPMAN_CHANNEL_DESCRIPTIONS
    _ch.OPT_IN_CHANNELS = HELPMAN_OPT_IN_CHANNELS


def format_helpman_channel_list() -> str:
    """Format helpman channels for --show listing."""
    configure_channels()
    return _ch.format_channel_list()
