"""Flow control commands: wait, if, loop, break.

Examples:
    <wait time="60"/>

    <if switch="3" is="off">
      <wait time="10"/>
    </if>

    <loop>
      <wait time="1"/>
      <break/>
    </loop>

The bodies of ``if`` and ``loop`` are closed with the terminator at the
body's depth before the end instruction, as the host expects.
"""

from rdml.commands.emitters import Const, Ref, block, leaf
from rdml.commands.schema import CommandDescriptor, group
from rdml.commands.values import BoundedInt, Fixed, Match

FRAMES = BoundedInt(0, description="frame count")
SWITCH_ID = BoundedInt(1, description="switch id")
SWITCH_STATE = Match({"on": Fixed(0), "off": Fixed(1)}, description="on or off")

WAIT = CommandDescriptor(
    name="wait",
    description="Wait for a number of frames.",
    groups=(group("time", value=FRAMES, description="frames to wait"),),
    emit=leaf(230, Ref("time")),
)

IF = CommandDescriptor(
    name="if",
    description="Run the body when a switch is in the given state.",
    groups=(
        group("switch", value=SWITCH_ID, description="switch to test"),
        group("is", value=SWITCH_STATE, default="on", description="expected state"),
    ),
    # 0 selects the switch condition
    emit=block(111, 412, Const(0), Ref("switch"), Ref("is"), body_terminator=True),
)

LOOP = CommandDescriptor(
    name="loop",
    description="Repeat the body until a break.",
    groups=(),
    emit=block(112, 413, body_terminator=True),
)

BREAK = CommandDescriptor(
    name="break",
    description="Leave the innermost loop.",
    groups=(),
    emit=leaf(113),
)

FLOW_COMMANDS = (WAIT, IF, LOOP, BREAK)
