"""helpman hints for the THAC0 output system.

Tips shown after a failure (context 'error') or with -v (context
'verbose').  Each hint shows at most once per run.

Import this module to register the hints.
"""

from helpman.lib.log_lib import Hint, register_hints


register_hints(
    Hint(
        id='exec.help_option',
        message=("  Tip: helpman runs '{prog} -help' by default; pick another "
                 "option with --help-option (e.g. --help-option=--help)."),
        context={'error'},
        min_level=0,
        category='exec',
    ),
    Hint(
        id='parse.flag_layout',
        message=("  Tip: long flags must be followed by an indented description "
                 "line, as Go's flag package prints them."),
        context={'error'},
        min_level=0,
        category='parse',
    ),
    Hint(
        id='include.name_format',
        message=("  Tip: the [NAME] section must read 'program - short "
                 "description' on one line."),
        context={'error'},
        min_level=0,
        category='include',
    ),
    Hint(
        id='render.source_date_epoch',
        message=("  Note: SOURCE_DATE_EPOCH must be a Unix timestamp in "
                 "seconds; unset it to use today's date."),
        context={'error'},
        min_level=0,
        category='render',
    ),
    Hint(
        id='parse.no_flags',
        message=("  Note: no flags recognised; only lines shaped like "
                 "'  -name' are read as options."),
        context={'verbose'},
        min_level=1,
        category='parse',
    ),
)
