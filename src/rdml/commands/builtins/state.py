"""Game state commands: switch, variable.

Both accept a single id or an inclusive range::

    <switch id="1..4" set="off"/>
    <variable id="7" add="10"/>
"""

from rdml.commands.builtins.flow import SWITCH_STATE
from rdml.commands.emitters import Choose, Const, Ref, leaf
from rdml.commands.schema import CommandDescriptor, group
from rdml.commands.values import BoundedInt, IntRange

# Operation codes, in the order the host numbers them
VARIABLE_OPERATIONS = ("set", "add", "sub", "mul", "div", "mod")

SWITCH = CommandDescriptor(
    name="switch",
    description="Turn a switch, or a range of switches, on or off.",
    groups=(
        group("id", value=IntRange(1, description="switch id or range")),
        group("set", value=SWITCH_STATE, default="on"),
    ),
    emit=leaf(121, Ref("id", 0), Ref("id", 1), Ref("set")),
)

VARIABLE = CommandDescriptor(
    name="variable",
    description="Apply an arithmetic operation to a variable, or a range of variables.",
    groups=(
        group("id", value=IntRange(1, description="variable id or range")),
        group(
            *VARIABLE_OPERATIONS,
            key="operand",
            value=BoundedInt(description="constant operand"),
            description="operation and its operand",
        ),
    ),
    emit=leaf(
        122,
        Ref("id", 0),
        Ref("id", 1),
        Choose("operand", {op: i for i, op in enumerate(VARIABLE_OPERATIONS)}),
        Const(0),  # constant operand
        Ref("operand"),
    ),
)

STATE_COMMANDS = (SWITCH, VARIABLE)
