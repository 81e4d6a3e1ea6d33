# rtl_runtime/adapters/registry.py
# A simple registry that binds all block functions by stable names.
# Short aliases match the command names the API and keymap use.

from typing import Dict, Callable

# --- B0 Kernel is called directly elsewhere ---

# --- B1: Classifier ---
from rtl_core.block_1_classifier.b1f1_script_classifier import b1f1_classify

# --- B3: Commands ---
from rtl_core.block_3_commands.b3f1_set_direction import b3f1_set_direction
from rtl_core.block_3_commands.b3f2_toggle_direction import b3f2_toggle_direction
from rtl_core.block_3_commands.b3f3_set_document_direction import b3f3_set_document_direction

# --- B4: Overlay ---
from rtl_core.block_4_overlay.b4f1_auto_decorations import b4f1_auto_decorations
from rtl_core.block_4_overlay.b4f2_rendered_directions import b4f2_rendered_directions

# --- B5: Reconcile ---
from rtl_core.block_5_reconcile.b5f1_reconcile import b5f1_reconcile

# --- B6: Transactions ---
from rtl_core.block_6_transactions.b6f1_transaction_apply import b6f1_apply_transaction

# --- B7: Keymap ---
from rtl_core.block_7_keymap.b7f1_keymap import b7f1_keymap


COMMAND_STEPS: Dict[str, str] = {
    "set_direction": "b3f1_set_direction",
    "toggle_direction": "b3f2_toggle_direction",
    "set_document_direction": "b3f3_set_document_direction",
}


def build_registry() -> Dict[str, Callable]:
    """
    Return a name->callable map for all blocks.
    Keys use the canonical exported function names plus command-name aliases.
    """
    reg: Dict[str, Callable] = {
        # B1
        "b1f1_classify": b1f1_classify,

        # B3
        "b3f1_set_direction": b3f1_set_direction,
        "b3f2_toggle_direction": b3f2_toggle_direction,
        "b3f3_set_document_direction": b3f3_set_document_direction,

        # B4
        "b4f1_auto_decorations": b4f1_auto_decorations,
        "b4f2_rendered_directions": b4f2_rendered_directions,

        # B5
        "b5f1_reconcile": b5f1_reconcile,

        # B6
        "b6f1_apply_transaction": b6f1_apply_transaction,

        # B7
        "b7f1_keymap": b7f1_keymap,
    }
    # short names (commands)
    for name, key in COMMAND_STEPS.items():
        reg[name] = reg[key]

    return reg
