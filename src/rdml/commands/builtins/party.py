"""Party commands: get, lose, heal.

The opcode depends on which alternative attribute was given::

    <get item="3" n="2"/>        change items    (126)
    <get weapon="1"/>            change weapons  (127)
    <lose armor="2" n_var="5"/>  change armors   (128), amount from variable 5
    <heal hpof="1" n="50"/>      change HP       (311)
    <heal mpof="all" n="10"/>    change MP       (312)
    <heal tpof="2" n_var="4"/>   change TP       (326)

``revive`` is only accepted together with ``hpof``.
"""

from rdml.commands.emitters import Choose, Const, Ref, dispatch, leaf
from rdml.commands.schema import CommandDescriptor, EmitFunc, group
from rdml.commands.values import Boolean, BoundedInt, Fixed, Match

AMOUNT = BoundedInt(0, description="amount or variable id")
ITEM_ID = BoundedInt(1, description="database id")
# "all" addresses the whole party
ACTOR = Match({"all": Fixed(0), "": BoundedInt(1)}, description="actor id or 'all'")

# 0: constant amount, 1: amount read from a variable
OPERAND_TYPE = Choose("n", {"n": 0, "n_var": 1})

ITEM_GROUPS = (
    group("item", "weapon", "armor", key="target", value=ITEM_ID),
    group("n", "n_var", key="n", value=AMOUNT, default="1"),
)


def _change_items(operation: int) -> EmitFunc:
    params = (Ref("target"), Const(operation), OPERAND_TYPE, Ref("n"))
    return dispatch(
        "target",
        {
            "item": leaf(126, *params),
            # weapons and armors also take "include equipment"
            "weapon": leaf(127, *params, Const(False)),
            "armor": leaf(128, *params, Const(False)),
        },
    )


GET = CommandDescriptor(
    name="get",
    description="Add items, weapons or armors to the inventory.",
    groups=ITEM_GROUPS,
    emit=_change_items(0),
)

LOSE = CommandDescriptor(
    name="lose",
    description="Remove items, weapons or armors from the inventory.",
    groups=ITEM_GROUPS,
    emit=_change_items(1),
)

_HEAL_PARAMS = (Const(0), Ref("actor"), Const(0), OPERAND_TYPE, Ref("n"))

HEAL = CommandDescriptor(
    name="heal",
    description="Restore HP, MP or TP of an actor or the whole party.",
    groups=(
        group("hpof", "mpof", "tpof", key="actor", value=ACTOR, description="parameter and actor"),
        group("n", "n_var", key="n", value=AMOUNT, description="amount or variable"),
        group(
            "revive",
            value=Boolean(),
            default="false",
            requires=("actor", "hpof"),
            description="allow knocking out / reviving",
        ),
    ),
    emit=dispatch(
        "actor",
        {
            "hpof": leaf(311, *_HEAL_PARAMS, Ref("revive")),
            "mpof": leaf(312, *_HEAL_PARAMS),
            "tpof": leaf(326, *_HEAL_PARAMS),
        },
    ),
)

PARTY_COMMANDS = (GET, LOSE, HEAL)
