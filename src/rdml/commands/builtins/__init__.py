"""Built-in commands.

Representative entries of the host command set, grouped by concern:

- flow: wait, if, loop, break
- state: switch, variable
- party: get, lose, heal
- text: m (alias message), comment
"""

from rdml.commands.builtins.flow import BREAK, FLOW_COMMANDS, IF, LOOP, WAIT
from rdml.commands.builtins.party import GET, HEAL, LOSE, PARTY_COMMANDS
from rdml.commands.builtins.state import STATE_COMMANDS, SWITCH, VARIABLE
from rdml.commands.builtins.text import COMMENT, MESSAGE, TEXT_COMMANDS

BUILTIN_COMMANDS = (*FLOW_COMMANDS, *STATE_COMMANDS, *PARTY_COMMANDS, *TEXT_COMMANDS)

__all__ = [
    "BREAK",
    "BUILTIN_COMMANDS",
    "COMMENT",
    "GET",
    "HEAL",
    "IF",
    "LOOP",
    "LOSE",
    "MESSAGE",
    "SWITCH",
    "VARIABLE",
    "WAIT",
]
